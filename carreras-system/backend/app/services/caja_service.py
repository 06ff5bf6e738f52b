"""Global cash ledger (caja).

The caja only ever sees movements with no event attached. Event-scoped
rows live in the same table but are managed through their event, so every
write path here checks the scope before touching a row.
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFound, UnresolvedReference
from app.models.cuenta import Cuenta
from app.models.transaccion import Alcance, Operacion, TipoMovimiento, Transaccion
from app.schemas.caja import CuentaCreate, MovimientoCreate, MovimientoFilter, MovimientoUpdate
from app.services import catalog_service
from app.services.caja_validation import (
    coerce_cuenta_id,
    ensure_global,
    normalize_moneda,
    normalize_movimiento,
    validate_fecha,
    validate_operacion,
)
from app.utils.currency import parse_money_to_cents

logger = logging.getLogger(__name__)


# --- Catalog & Accounts ---


async def get_tipos_globales(db: AsyncSession) -> list[TipoMovimiento]:
    result = await db.execute(
        select(TipoMovimiento)
        .where(TipoMovimiento.alcance == Alcance.GLOBAL)
        .order_by(TipoMovimiento.grupo, TipoMovimiento.nombre)
    )
    return list(result.scalars().all())


async def get_cuentas(db: AsyncSession) -> list[Cuenta]:
    result = await db.execute(
        select(Cuenta).order_by(Cuenta.is_default.desc(), Cuenta.id)
    )
    return list(result.scalars().all())


async def create_cuenta(db: AsyncSession, data: CuentaCreate) -> Cuenta:
    nombre = data.nombre.strip()
    if not nombre:
        raise ValueError("nombre requerido")
    existing = await db.execute(select(Cuenta.id).where(Cuenta.nombre == nombre))
    if existing.scalar_one_or_none() is not None:
        raise ValueError(f"Ya existe una cuenta llamada {nombre}")

    if data.is_default:
        await _clear_defaults(db)
    cuenta = Cuenta(
        nombre=nombre,
        moneda=normalize_moneda(data.moneda),
        descripcion=data.descripcion,
        is_default=data.is_default,
    )
    db.add(cuenta)
    await db.flush()
    await db.refresh(cuenta)
    return cuenta


async def _clear_defaults(db: AsyncSession) -> None:
    await db.execute(
        update(Cuenta)
        .where(Cuenta.is_default == True)  # noqa: E712
        .values(is_default=False)
    )


async def _check_cuenta(db: AsyncSession, cuenta_id: int | None) -> None:
    if cuenta_id is not None and await db.get(Cuenta, cuenta_id) is None:
        raise UnresolvedReference(f"Cuenta con id {cuenta_id} no encontrada")


async def _resolve_tipo(db: AsyncSession, tipo_id: str | None) -> TipoMovimiento:
    if not tipo_id:
        return await catalog_service.get_or_create_default_tipo(db)
    tipo = await catalog_service.get_tipo_movimiento(db, tipo_id)
    if tipo is None:
        raise UnresolvedReference(f"tipo_id inválido: {tipo_id}")
    return tipo


# --- Movements ---


async def get_movimientos(
    db: AsyncSession, filters: MovimientoFilter
) -> tuple[list[Transaccion], int]:
    query = select(Transaccion)
    count_query = select(func.count(Transaccion.id))

    conditions = [Transaccion.carrera_id.is_(None)]
    if filters.year is not None:
        conditions.append(func.extract("year", Transaccion.fecha) == filters.year)
        if filters.month is not None:
            conditions.append(func.extract("month", Transaccion.fecha) == filters.month)
    if filters.operacion is not None:
        conditions.append(Transaccion.operacion == filters.operacion)
    if filters.moneda:
        conditions.append(Transaccion.moneda == filters.moneda.strip().upper())

    query = query.where(*conditions)
    count_query = count_query.where(*conditions)

    total_result = await db.execute(count_query)
    total = total_result.scalar()

    offset = (filters.page - 1) * filters.limit
    query = query.order_by(Transaccion.fecha.desc(), Transaccion.id.desc())
    query = query.offset(offset).limit(filters.limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def get_movimiento(db: AsyncSession, txn_id: int) -> Transaccion | None:
    result = await db.execute(select(Transaccion).where(Transaccion.id == txn_id))
    return result.scalar_one_or_none()


async def create_movimiento(db: AsyncSession, data: MovimientoCreate) -> Transaccion:
    mov = normalize_movimiento(
        data.fecha, data.moneda, data.operacion, data.cuenta_desde, data.cuenta_hasta
    )
    tipo = await _resolve_tipo(db, data.tipo_id)
    await _check_cuenta(db, mov.cuenta_desde_id)
    await _check_cuenta(db, mov.cuenta_hasta_id)

    txn = Transaccion(
        fecha=mov.fecha,
        carrera_id=None,
        tipo_id=tipo.id,
        grupo=tipo.grupo,
        operacion=mov.operacion,
        moneda=mov.moneda,
        monto_cents=parse_money_to_cents(data.monto),
        cuenta_desde_id=mov.cuenta_desde_id,
        cuenta_hasta_id=mov.cuenta_hasta_id,
        subtipo=data.subtipo or None,
        estado=data.estado or "pendiente",
        factura_estado=data.factura_estado or "no_corresponde",
        nota=data.nota or None,
    )
    db.add(txn)
    await db.flush()
    await db.refresh(txn)
    await db.refresh(txn, ["tipo"])
    return txn


async def update_movimiento(
    db: AsyncSession, txn_id: int, data: MovimientoUpdate
) -> Transaccion:
    """Partial update of a global movement. Nothing is written unless all fields validate."""
    txn = await get_movimiento(db, txn_id)
    if txn is None:
        raise NotFound(f"Movimiento con id {txn_id} no encontrado")
    ensure_global(txn)

    payload = data.model_dump(exclude_unset=True)
    if not payload:
        raise ValueError("Sin datos para actualizar")

    changes: dict = {}
    if "fecha" in payload:
        changes["fecha"] = validate_fecha(payload["fecha"])
    if "moneda" in payload:
        changes["moneda"] = normalize_moneda(payload["moneda"])
    if "operacion" in payload:
        changes["operacion"] = validate_operacion(payload["operacion"])
    if "tipo_id" in payload:
        tipo = await _resolve_tipo(db, payload["tipo_id"])
        changes["tipo_id"] = tipo.id
        changes["grupo"] = tipo.grupo
    if "monto" in payload:
        changes["monto_cents"] = parse_money_to_cents(payload["monto"])
    for field, column in (("cuenta_desde", "cuenta_desde_id"), ("cuenta_hasta", "cuenta_hasta_id")):
        if field in payload:
            changes[column] = coerce_cuenta_id(payload[field])
            await _check_cuenta(db, changes[column])
    for field in ("subtipo", "nota"):
        if field in payload:
            changes[field] = payload[field] or None
    for field in ("estado", "factura_estado"):
        if payload.get(field):
            changes[field] = payload[field]

    operacion = changes.get("operacion", txn.operacion)
    desde = changes.get("cuenta_desde_id", txn.cuenta_desde_id)
    hasta = changes.get("cuenta_hasta_id", txn.cuenta_hasta_id)
    if operacion is Operacion.TRANSFER and desde is not None and desde == hasta:
        raise ValueError("No se puede transferir a la misma cuenta")

    for key, value in changes.items():
        setattr(txn, key, value)
    await db.flush()
    await db.refresh(txn)
    await db.refresh(txn, ["tipo"])
    return txn


async def delete_movimiento(db: AsyncSession, txn_id: int) -> bool:
    txn = await get_movimiento(db, txn_id)
    if txn is None:
        return False
    ensure_global(txn)
    await db.delete(txn)
    await db.flush()
    logger.info("Deleted caja movement %d", txn_id)
    return True
