from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.venta_tipo import Moneda, VentaCategoria
from app.schemas.common import Cents, MoneyInput, Pct, PctInput


# --- Carrera Schemas ---


class CarreraCreate(BaseModel):
    nombre: str = ""
    fecha: str | None = None
    lugar: str | None = None
    tipo: str | None = None
    corredores: int | None = None
    accesos: int | None = None
    ingreso_ars: MoneyInput = None
    ingreso_usd: MoneyInput = None
    mp_pct: PctInput = None
    ib_pct: PctInput = None
    iva_pct: PctInput = None
    prov_pct: PctInput = None
    deb_cred_pct: PctInput = None


class CarreraUpdate(BaseModel):
    nombre: str | None = None
    fecha: str | None = None
    lugar: str | None = None
    tipo: str | None = None
    corredores: int | None = None
    accesos: int | None = None
    ingreso_ars: MoneyInput = None
    ingreso_usd: MoneyInput = None
    mp_pct: PctInput = None
    ib_pct: PctInput = None
    iva_pct: PctInput = None
    prov_pct: PctInput = None
    deb_cred_pct: PctInput = None


class CarreraResponse(BaseModel):
    id: int
    nombre: str
    fecha: date
    lugar: str | None
    tipo: str | None
    corredores: int | None
    accesos: int | None
    moneda_base: str
    ingreso_ars_cents: Cents
    ingreso_usd_cents: Cents
    mp_pct: Pct | None
    ib_pct: Pct | None
    iva_pct: Pct | None
    prov_pct: Pct | None
    deb_cred_pct: Pct | None
    created_at: datetime

    model_config = {"from_attributes": True}


class CarreraListItem(CarreraResponse):
    ingresos_ars: Cents = 0
    ingresos_usd: Cents = 0
    costo_mp: Cents = 0
    costo_fotografos: Cents = 0
    costo_gastos_especificos: Cents = 0
    gastos_ars: Cents = 0
    resultado_ars: Cents = 0
    gastos_usd: Cents = 0
    resultado_usd: Cents = 0
    pedidos_totales: int = 0
    comision_ars: Cents = 0
    comision_usd: Cents = 0


class CarreraCalculoResponse(BaseModel):
    ingresos_ars: Cents
    ingresos_usd: Cents
    costo_fot: Cents
    costo_mp: Cents
    costo_ib: Cents
    costo_iva: Cents
    costo_prov: Cents
    costo_org_pre: Cents
    costo_org_post: Cents
    costo_deb_cred: Cents
    costo_venta_tipos_ars: Cents
    costo_venta_tipos_usd: Cents
    costo_gastos_especificos: Cents
    gastos_totales_ars: Cents
    gastos_totales_usd: Cents
    resultado_final_ars: Cents
    resultado_final_usd: Cents

    # Legacy figures (ARS only)
    costo_venta_tipos: Cents
    gastos_totales: Cents
    resultado_final: Cents

    pedidos_totales: int
    comision_ars: Cents
    comision_usd: Cents

    model_config = {"from_attributes": True}


# --- Venta Tipo Schemas ---


class VentaTipoIn(BaseModel):
    nombre: str | None = None
    tipo: VentaCategoria | None = None
    moneda: Moneda = Moneda.ARS
    precio: MoneyInput = None
    cantidad: int = Field(0, ge=0)
    comision_pct: PctInput = None


class VentasReplace(BaseModel):
    items: list[VentaTipoIn]


class VentaTipoResponse(BaseModel):
    id: int
    carrera_id: int
    nombre: str
    tipo: VentaCategoria | None
    moneda: Moneda
    precio_cents: Cents
    cantidad: int
    comision_pct: Pct | None

    model_config = {"from_attributes": True}


# --- Carrera Fotografo Schemas ---


class CarreraFotografoIn(BaseModel):
    fotografo_id: int | None = None
    nombre: str | None = None
    costo: MoneyInput = None
    fotos_tomadas: int = Field(0, ge=0)
    descargas: int = Field(0, ge=0)
    descargas_unicas: int = Field(0, ge=0)
    horas_trabajadas: str | float | None = None
    facturo: bool = False
    pagado: bool = False
    rol: str | None = None


class FotografosReplace(BaseModel):
    items: list[CarreraFotografoIn]


class CarreraFotografoResponse(BaseModel):
    id: int
    carrera_id: int
    fotografo_id: int | None
    nombre: str | None
    costo_cents: Cents
    fotos_tomadas: int
    descargas: int
    descargas_unicas: int
    horas_trabajadas: float
    facturo: bool
    pagado: bool
    rol: str | None

    model_config = {"from_attributes": True}


# --- Gasto Especifico Schemas ---


class GastoEspecificoIn(BaseModel):
    nombre: str | None = None
    tipo: str | None = None
    monto: MoneyInput = None
    pagado: bool = False
    facturado: bool = False


class GastosReplace(BaseModel):
    items: list[GastoEspecificoIn]


class GastoEspecificoResponse(BaseModel):
    id: int
    carrera_id: int
    nombre: str
    tipo: str | None
    monto_cents: Cents
    pagado: bool
    facturado: bool

    model_config = {"from_attributes": True}


class CarreraDetail(CarreraResponse):
    ventas: list[VentaTipoResponse] = []
    fotografos: list[CarreraFotografoResponse] = []
    gastos_especificos: list[GastoEspecificoResponse] = []
    calculo: CarreraCalculoResponse
