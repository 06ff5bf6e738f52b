import enum
from datetime import date, datetime, timezone

from sqlalchemy import BigInteger, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class Operacion(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    OPENING = "opening"  # global ledger only


class Alcance(str, enum.Enum):
    GLOBAL = "global"
    CARRERA = "carrera"


class TipoMovimiento(Base):
    """Fee-type / movement-type catalog entry. Seeded at startup."""

    __tablename__ = "tipos_movimiento"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    grupo: Mapped[str] = mapped_column(String(30), nullable=False)
    alcance: Mapped[Alcance] = mapped_column(Enum(Alcance), nullable=False)


class Transaccion(Base):
    __tablename__ = "transacciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fecha: Mapped[date] = mapped_column(Date, nullable=False)

    # NULL means the movement belongs to the global ledger (caja)
    carrera_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("carreras.id", ondelete="CASCADE"), nullable=True, index=True
    )
    tipo_id: Mapped[str | None] = mapped_column(
        String(50), ForeignKey("tipos_movimiento.id", ondelete="SET NULL"), nullable=True
    )
    grupo: Mapped[str | None] = mapped_column(String(30), nullable=True)
    operacion: Mapped[Operacion | None] = mapped_column(Enum(Operacion), nullable=True)
    moneda: Mapped[str] = mapped_column(String(3), nullable=False, default="ARS")
    monto_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    # Transfer fields
    cuenta_desde_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cuentas.id", ondelete="SET NULL"), nullable=True
    )
    cuenta_hasta_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cuentas.id", ondelete="SET NULL"), nullable=True
    )

    subtipo: Mapped[str | None] = mapped_column(String(100), nullable=True)
    estado: Mapped[str] = mapped_column(String(30), nullable=False, default="pendiente")
    factura_estado: Mapped[str] = mapped_column(
        String(30), nullable=False, default="no_corresponde"
    )
    nota: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    tipo = relationship("TipoMovimiento", lazy="selectin")

    @property
    def is_global(self) -> bool:
        return self.carrera_id is None
