import enum
from decimal import Decimal

from sqlalchemy import BigInteger, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.carrera import Percent


class Moneda(str, enum.Enum):
    ARS = "ARS"
    USD = "USD"


class VentaCategoria(str, enum.Enum):
    PREVENTA = "PREVENTA"
    PACK = "PACK"
    UNIDAD = "UNIDAD"
    OTRO = "OTRO"


class CarreraVentaTipo(Base):
    __tablename__ = "carrera_venta_tipos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    carrera_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("carreras.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    tipo: Mapped[VentaCategoria | None] = mapped_column(
        Enum(VentaCategoria), nullable=True
    )
    moneda: Mapped[Moneda] = mapped_column(
        Enum(Moneda), nullable=False, default=Moneda.ARS
    )
    precio_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    cantidad: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comision_pct: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)

    # Relationships
    carrera = relationship("Carrera", back_populates="ventas")
