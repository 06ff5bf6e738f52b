from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import BigInteger, Date, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

# Percentages are stored as plain decimals (10.5 means 10.5%).
Percent = Numeric(7, 3)


class Carrera(Base):
    __tablename__ = "carreras"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    fecha: Mapped[date] = mapped_column(Date, nullable=False)
    lugar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tipo: Mapped[str | None] = mapped_column(String(50), nullable=True)
    corredores: Mapped[int | None] = mapped_column(Integer, nullable=True)
    accesos: Mapped[int | None] = mapped_column(Integer, nullable=True)
    moneda_base: Mapped[str] = mapped_column(String(3), nullable=False, default="ARS")

    # Revenue cache, rewritten every time the sale types are replaced
    ingreso_ars_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    ingreso_usd_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    # Fee schedule
    mp_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    ib_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    iva_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    prov_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    deb_cred_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    ventas = relationship(
        "CarreraVentaTipo", back_populates="carrera",
        cascade="all, delete-orphan", order_by="CarreraVentaTipo.id",
    )
    fotografos = relationship(
        "CarreraFotografo", back_populates="carrera",
        cascade="all, delete-orphan", order_by="CarreraFotografo.id",
    )
    gastos_especificos = relationship(
        "GastoEspecifico", back_populates="carrera",
        cascade="all, delete-orphan", order_by="GastoEspecifico.id",
    )
