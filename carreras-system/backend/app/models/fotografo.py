from sqlalchemy import BigInteger, Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class Fotografo(Base):
    __tablename__ = "fotografos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    mail: Mapped[str | None] = mapped_column(String(200), nullable=True)
    telefono: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ubicacion: Mapped[str | None] = mapped_column(String(200), nullable=True)
    cuit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dni: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cbu: Mapped[str | None] = mapped_column(String(30), nullable=True)
    alias: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tipo_facturacion: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notas: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    carreras = relationship(
        "CarreraFotografo", back_populates="fotografo",
        cascade="all, delete-orphan", order_by="CarreraFotografo.id",
    )


class CarreraFotografo(Base):
    """A photographer's work on one event. Cost is always ARS."""

    __tablename__ = "carrera_fotografos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    carrera_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("carreras.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Nullable only for legacy rows; scripts/fix_fotografo_links.py repairs them
    fotografo_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("fotografos.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    nombre: Mapped[str | None] = mapped_column(String(200), nullable=True)
    costo_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    fotos_tomadas: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    descargas: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    descargas_unicas: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    horas_trabajadas: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    facturo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pagado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rol: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    carrera = relationship("Carrera", back_populates="fotografos")
    fotografo = relationship("Fotografo", back_populates="carreras")
