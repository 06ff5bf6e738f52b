from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.transaccion import Alcance, Operacion
from app.schemas.common import Cents, MoneyInput

AccountRef = int | float | str | None


# --- Catalog & Account Schemas ---


class TipoMovimientoResponse(BaseModel):
    id: str
    nombre: str
    grupo: str
    alcance: Alcance

    model_config = {"from_attributes": True}


class CuentaCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    moneda: str | None = None
    descripcion: str | None = None
    is_default: bool = False


class CuentaResponse(BaseModel):
    id: int
    nombre: str
    moneda: str
    descripcion: str | None
    is_default: bool
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Movimiento Schemas ---


class MovimientoCreate(BaseModel):
    fecha: str | None = None
    tipo_id: str | None = None
    operacion: str | None = None
    moneda: str | None = None
    monto: MoneyInput = None
    cuenta_desde: AccountRef = None
    cuenta_hasta: AccountRef = None
    subtipo: str | None = None
    estado: str | None = None
    factura_estado: str | None = None
    nota: str | None = None


class MovimientoUpdate(BaseModel):
    fecha: str | None = None
    tipo_id: str | None = None
    operacion: str | None = None
    moneda: str | None = None
    monto: MoneyInput = None
    cuenta_desde: AccountRef = None
    cuenta_hasta: AccountRef = None
    subtipo: str | None = None
    estado: str | None = None
    factura_estado: str | None = None
    nota: str | None = None


class MovimientoResponse(BaseModel):
    id: int
    fecha: date
    carrera_id: int | None
    tipo_id: str | None
    grupo: str | None
    operacion: Operacion | None
    moneda: str
    monto_cents: Cents
    cuenta_desde_id: int | None
    cuenta_hasta_id: int | None
    subtipo: str | None
    estado: str
    factura_estado: str
    nota: str | None
    created_at: datetime

    tipo: TipoMovimientoResponse | None = None

    model_config = {"from_attributes": True}


class MovimientoFilter(BaseModel):
    year: int | None = None
    month: int | None = Field(None, ge=1, le=12)
    operacion: Operacion | None = None
    moneda: str | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(50, ge=1, le=200)
