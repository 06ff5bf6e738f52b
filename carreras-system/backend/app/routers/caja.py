from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.transaccion import Operacion
from app.schemas.caja import (
    CuentaCreate,
    CuentaResponse,
    MovimientoCreate,
    MovimientoFilter,
    MovimientoResponse,
    MovimientoUpdate,
    TipoMovimientoResponse,
)
from app.schemas.common import ApiResponse
from app.services import caja_service

router = APIRouter(prefix="/caja", tags=["caja"])


# --- Catalog & Accounts ---


@router.get("/tipos")
async def list_tipos(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[TipoMovimientoResponse]]:
    tipos = await caja_service.get_tipos_globales(db)
    return ApiResponse.ok([TipoMovimientoResponse.model_validate(t) for t in tipos])


@router.get("/cuentas")
async def list_cuentas(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CuentaResponse]]:
    cuentas = await caja_service.get_cuentas(db)
    return ApiResponse.ok([CuentaResponse.model_validate(c) for c in cuentas])


@router.post("/cuentas")
async def create_cuenta(
    body: CuentaCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CuentaResponse]:
    try:
        cuenta = await caja_service.create_cuenta(db, body)
        return ApiResponse.ok(CuentaResponse.model_validate(cuenta))
    except ValueError as e:
        return ApiResponse.fail(str(e))


# --- Movements ---


@router.get("/movimientos")
async def list_movimientos(
    year: int | None = Query(None),
    month: int | None = Query(None, ge=1, le=12),
    operacion: Operacion | None = Query(None),
    moneda: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[MovimientoResponse]]:
    filters = MovimientoFilter(
        year=year, month=month, operacion=operacion, moneda=moneda,
        page=page, limit=limit,
    )
    movimientos, total = await caja_service.get_movimientos(db, filters)
    return ApiResponse.ok(
        [MovimientoResponse.model_validate(m) for m in movimientos],
        meta={"total": total, "page": page, "limit": limit},
    )


@router.post("/movimientos")
async def create_movimiento(
    body: MovimientoCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MovimientoResponse]:
    try:
        txn = await caja_service.create_movimiento(db, body)
        return ApiResponse.ok(MovimientoResponse.model_validate(txn))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.put("/movimientos/{txn_id}")
async def update_movimiento(
    txn_id: int,
    body: MovimientoUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MovimientoResponse]:
    try:
        txn = await caja_service.update_movimiento(db, txn_id, body)
        return ApiResponse.ok(MovimientoResponse.model_validate(txn))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.delete("/movimientos/{txn_id}")
async def delete_movimiento(
    txn_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    try:
        deleted = await caja_service.delete_movimiento(db, txn_id)
        if not deleted:
            return ApiResponse.fail(f"Movimiento con id {txn_id} no encontrado")
        return ApiResponse.ok(None)
    except ValueError as e:
        return ApiResponse.fail(str(e))
