from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.carrera import (
    CarreraCalculoResponse,
    CarreraCreate,
    CarreraDetail,
    CarreraFotografoResponse,
    CarreraListItem,
    CarreraResponse,
    CarreraUpdate,
    FotografosReplace,
    GastoEspecificoResponse,
    GastosReplace,
    VentaTipoResponse,
    VentasReplace,
)
from app.schemas.common import ApiResponse
from app.services import carrera_service

router = APIRouter(prefix="/carreras", tags=["carreras"])


# --- Helpers ---


def _to_list_item(carrera, calculo) -> CarreraListItem:
    return CarreraListItem(
        **CarreraResponse.model_validate(carrera).model_dump(),
        ingresos_ars=calculo.ingresos_ars,
        ingresos_usd=calculo.ingresos_usd,
        costo_mp=calculo.costo_mp,
        costo_fotografos=calculo.costo_fot,
        costo_gastos_especificos=calculo.costo_gastos_especificos,
        gastos_ars=calculo.gastos_totales_ars,
        resultado_ars=calculo.resultado_final_ars,
        gastos_usd=calculo.gastos_totales_usd,
        resultado_usd=calculo.resultado_final_usd,
        pedidos_totales=calculo.pedidos_totales,
        comision_ars=calculo.comision_ars,
        comision_usd=calculo.comision_usd,
    )


def _to_detail(detalle: carrera_service.CarreraDetalle) -> CarreraDetail:
    return CarreraDetail(
        **CarreraResponse.model_validate(detalle.carrera).model_dump(),
        ventas=[VentaTipoResponse.model_validate(v) for v in detalle.ventas],
        fotografos=[CarreraFotografoResponse.model_validate(f) for f in detalle.fotografos],
        gastos_especificos=[
            GastoEspecificoResponse.model_validate(g) for g in detalle.gastos_especificos
        ],
        calculo=CarreraCalculoResponse.model_validate(detalle.calculo),
    )


# --- Carrera Endpoints ---


@router.get("")
async def list_carreras(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CarreraListItem]]:
    rows = await carrera_service.list_carreras(db)
    return ApiResponse.ok(
        [_to_list_item(c, calculo) for c, calculo in rows],
        meta={"total": len(rows)},
    )


@router.get("/{carrera_id}")
async def get_carrera(
    carrera_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CarreraDetail]:
    detalle = await carrera_service.get_carrera_detail(db, carrera_id)
    if detalle is None:
        return ApiResponse.fail(f"Carrera con id {carrera_id} no encontrada")
    return ApiResponse.ok(_to_detail(detalle))


@router.post("")
async def create_carrera(
    body: CarreraCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CarreraResponse]:
    try:
        carrera = await carrera_service.create_carrera(db, body)
        return ApiResponse.ok(CarreraResponse.model_validate(carrera))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.put("/{carrera_id}")
async def update_carrera(
    carrera_id: int,
    body: CarreraUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CarreraResponse]:
    try:
        carrera = await carrera_service.update_carrera(db, carrera_id, body)
        return ApiResponse.ok(CarreraResponse.model_validate(carrera))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.delete("/{carrera_id}")
async def delete_carrera(
    carrera_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    deleted = await carrera_service.delete_carrera(db, carrera_id)
    if not deleted:
        return ApiResponse.fail(f"Carrera con id {carrera_id} no encontrada")
    return ApiResponse.ok(None)


# --- Sale types ---


@router.get("/{carrera_id}/ventas")
async def get_ventas(
    carrera_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[VentaTipoResponse]]:
    ventas = await carrera_service.get_ventas(db, carrera_id)
    return ApiResponse.ok([VentaTipoResponse.model_validate(v) for v in ventas])


@router.put("/{carrera_id}/ventas")
async def replace_ventas(
    carrera_id: int,
    body: VentasReplace,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[VentaTipoResponse]]:
    try:
        ventas = await carrera_service.replace_ventas(db, carrera_id, body.items)
        return ApiResponse.ok([VentaTipoResponse.model_validate(v) for v in ventas])
    except ValueError as e:
        return ApiResponse.fail(str(e))


# --- Photographer assignments ---


@router.get("/{carrera_id}/fotografos")
async def get_fotografos(
    carrera_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CarreraFotografoResponse]]:
    rows = await carrera_service.get_fotografos(db, carrera_id)
    return ApiResponse.ok([CarreraFotografoResponse.model_validate(r) for r in rows])


@router.put("/{carrera_id}/fotografos")
async def replace_fotografos(
    carrera_id: int,
    body: FotografosReplace,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CarreraFotografoResponse]]:
    try:
        rows = await carrera_service.replace_fotografos(db, carrera_id, body.items)
        return ApiResponse.ok([CarreraFotografoResponse.model_validate(r) for r in rows])
    except ValueError as e:
        return ApiResponse.fail(str(e))


# --- Specific expenses ---


@router.get("/{carrera_id}/gastos-especificos")
async def get_gastos_especificos(
    carrera_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[GastoEspecificoResponse]]:
    rows = await carrera_service.get_gastos_especificos(db, carrera_id)
    return ApiResponse.ok([GastoEspecificoResponse.model_validate(r) for r in rows])


@router.put("/{carrera_id}/gastos-especificos")
async def replace_gastos_especificos(
    carrera_id: int,
    body: GastosReplace,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[GastoEspecificoResponse]]:
    try:
        rows = await carrera_service.replace_gastos_especificos(db, carrera_id, body.items)
        return ApiResponse.ok([GastoEspecificoResponse.model_validate(r) for r in rows])
    except ValueError as e:
        return ApiResponse.fail(str(e))
