from datetime import date

from pydantic import BaseModel, Field

from app.schemas.common import Cents


class FotografoCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=200)


class FotografoUpdate(BaseModel):
    nombre: str | None = Field(None, min_length=1, max_length=200)
    mail: str | None = None
    telefono: str | None = None
    ubicacion: str | None = None
    cuit: str | None = None
    dni: str | None = None
    cbu: str | None = None
    alias: str | None = None
    tipo_facturacion: str | None = None
    notas: str | None = None


class FotografoResponse(BaseModel):
    id: int
    nombre: str
    mail: str | None
    telefono: str | None
    ubicacion: str | None
    cuit: str | None
    dni: str | None
    cbu: str | None
    alias: str | None
    tipo_facturacion: str | None
    notas: str | None

    model_config = {"from_attributes": True}


class FotografoKpis(BaseModel):
    carreras: int
    fotos_totales: int
    descargas_totales: int
    descargas_unicas: int
    costo_total_cents: Cents
    pct_desc_fotos: float | None  # downloads per 100 photos
    pct_uni_desc: float | None  # unique downloads per 100 downloads
    costo_por_descarga: float | None = None  # in currency units, detail only


class FotografoListItem(FotografoResponse):
    kpis: FotografoKpis


class FotografoCarreraDetalle(BaseModel):
    id: int
    carrera_id: int
    carrera_nombre: str | None
    carrera_fecha: date | None
    rol: str | None
    fotos: int
    descargas: int
    descargas_unicas: int
    costo_cents: Cents
    facturo: bool
    pagado: bool
    horas_trabajadas: float
    pct_desc_fotos: float | None
    pct_uni_desc: float | None


class FotografoDetail(FotografoResponse):
    carreras: list[FotografoCarreraDetalle]
    kpis: FotografoKpis


class RankingEntryResponse(BaseModel):
    fotografo_id: int
    nombre: str
    fotos_totales: int
    descargas_totales: int
    descargas_unicas_totales: int
    pct_desc_fotos: float
    reach: float
    score_volumen: float
    score_descargas: float
    score_eficiencia: float
    score_reach: float
    score: float

    model_config = {"from_attributes": True}
