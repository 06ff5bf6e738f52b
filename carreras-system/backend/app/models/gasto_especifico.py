from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class GastoEspecifico(Base):
    __tablename__ = "gastos_especificos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    carrera_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("carreras.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    tipo: Mapped[str | None] = mapped_column(String(50), nullable=True)
    monto_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    pagado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    facturado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    carrera = relationship("Carrera", back_populates="gastos_especificos")
