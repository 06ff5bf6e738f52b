import logging
from dataclasses import dataclass

from sqlalchemy import delete, func, literal, select, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import EmptyReplacementGuard, InvalidDate, NotFound
from app.models.carrera import Carrera
from app.models.fotografo import CarreraFotografo, Fotografo
from app.models.gasto_especifico import GastoEspecifico
from app.models.transaccion import Transaccion
from app.models.venta_tipo import CarreraVentaTipo
from app.schemas.carrera import (
    CarreraCreate,
    CarreraFotografoIn,
    CarreraUpdate,
    GastoEspecificoIn,
    VentaTipoIn,
)
from app.services import catalog_service
from app.services.finance_calc import (
    CarreraCalculo,
    CostosCarrera,
    FeeSchedule,
    compute_carrera,
    compute_carreras_list,
    revenue_by_currency,
)
from app.utils.currency import parse_money_to_cents, parse_pct, parse_pct_or_default
from app.utils.date_helpers import parse_date_iso

logger = logging.getLogger(__name__)


@dataclass
class CarreraDetalle:
    carrera: Carrera
    ventas: list[CarreraVentaTipo]
    fotografos: list[CarreraFotografo]
    gastos_especificos: list[GastoEspecifico]
    calculo: CarreraCalculo


def _clean(value: str | None) -> str:
    return str(value or "").strip()


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def _parse_horas(raw) -> float:
    if _is_blank(raw):
        return 0.0
    try:
        return float(str(raw).replace(",", ".", 1))
    except ValueError:
        return 0.0


async def _get_or_raise(db: AsyncSession, carrera_id: int) -> Carrera:
    carrera = await get_carrera(db, carrera_id)
    if carrera is None:
        raise NotFound(f"Carrera con id {carrera_id} no encontrada")
    return carrera


# --- Read paths ---


async def get_carrera(db: AsyncSession, carrera_id: int) -> Carrera | None:
    result = await db.execute(select(Carrera).where(Carrera.id == carrera_id))
    return result.scalar_one_or_none()


async def _costos_por_carrera(
    db: AsyncSession, ids: list[int]
) -> dict[int, CostosCarrera]:
    """Photographer and specific-expense sums per event, in one grouped query."""
    fot = (
        select(
            CarreraFotografo.carrera_id.label("carrera_id"),
            literal("fot").label("kind"),
            func.coalesce(func.sum(CarreraFotografo.costo_cents), 0).label("total"),
        )
        .where(CarreraFotografo.carrera_id.in_(ids))
        .group_by(CarreraFotografo.carrera_id)
    )
    gastos = (
        select(
            GastoEspecifico.carrera_id.label("carrera_id"),
            literal("gasto").label("kind"),
            func.coalesce(func.sum(GastoEspecifico.monto_cents), 0).label("total"),
        )
        .where(GastoEspecifico.carrera_id.in_(ids))
        .group_by(GastoEspecifico.carrera_id)
    )
    result = await db.execute(union_all(fot, gastos))

    sums: dict[int, dict[str, int]] = {}
    for carrera_id, kind, total in result.all():
        sums.setdefault(carrera_id, {})[kind] = int(total or 0)
    return {
        carrera_id: CostosCarrera(
            costo_fot=s.get("fot", 0),
            costo_gastos_especificos=s.get("gasto", 0),
        )
        for carrera_id, s in sums.items()
    }


async def list_carreras(db: AsyncSession) -> list[tuple[Carrera, CarreraCalculo]]:
    """Executive list: every event with its figures, newest first."""
    result = await db.execute(
        select(Carrera).order_by(Carrera.fecha.desc(), Carrera.id.desc())
    )
    carreras = list(result.scalars().all())
    if not carreras:
        return []

    ids = [c.id for c in carreras]
    costos = await _costos_por_carrera(db, ids)
    ventas_result = await db.execute(
        select(CarreraVentaTipo).where(CarreraVentaTipo.carrera_id.in_(ids))
    )
    calculos = compute_carreras_list(carreras, ventas_result.scalars().all(), costos)
    return [(c, calculos[c.id]) for c in carreras]


async def get_ventas(db: AsyncSession, carrera_id: int) -> list[CarreraVentaTipo]:
    result = await db.execute(
        select(CarreraVentaTipo)
        .where(CarreraVentaTipo.carrera_id == carrera_id)
        .order_by(CarreraVentaTipo.id)
    )
    return list(result.scalars().all())


async def get_fotografos(db: AsyncSession, carrera_id: int) -> list[CarreraFotografo]:
    result = await db.execute(
        select(CarreraFotografo)
        .where(CarreraFotografo.carrera_id == carrera_id)
        .order_by(CarreraFotografo.id)
    )
    return list(result.scalars().all())


async def get_gastos_especificos(
    db: AsyncSession, carrera_id: int
) -> list[GastoEspecifico]:
    result = await db.execute(
        select(GastoEspecifico)
        .where(GastoEspecifico.carrera_id == carrera_id)
        .order_by(GastoEspecifico.id)
    )
    return list(result.scalars().all())


async def get_carrera_detail(db: AsyncSession, carrera_id: int) -> CarreraDetalle | None:
    carrera = await get_carrera(db, carrera_id)
    if carrera is None:
        return None

    ventas = await get_ventas(db, carrera_id)
    fotografos = await get_fotografos(db, carrera_id)
    gastos = await get_gastos_especificos(db, carrera_id)
    calculo = compute_carrera(ventas, fotografos, gastos, FeeSchedule.from_carrera(carrera))
    return CarreraDetalle(
        carrera=carrera,
        ventas=ventas,
        fotografos=fotografos,
        gastos_especificos=gastos,
        calculo=calculo,
    )


# --- Carrera CRUD ---


async def create_carrera(db: AsyncSession, data: CarreraCreate) -> Carrera:
    nombre = _clean(data.nombre)
    if not nombre:
        raise ValueError("nombre requerido")
    fecha = parse_date_iso(data.fecha)
    if fecha is None:
        raise InvalidDate("fecha debe ser YYYY-MM-DD")

    carrera = Carrera(
        nombre=nombre,
        fecha=fecha,
        lugar=_clean(data.lugar) or None,
        tipo=data.tipo or None,
        corredores=data.corredores,
        accesos=data.accesos,
        moneda_base=settings.HOME_CURRENCY,
        ingreso_ars_cents=parse_money_to_cents(data.ingreso_ars),
        ingreso_usd_cents=parse_money_to_cents(data.ingreso_usd),
        mp_pct=parse_pct_or_default(data.mp_pct, settings.DEFAULT_MP_PCT),
        ib_pct=parse_pct_or_default(data.ib_pct, settings.DEFAULT_IB_PCT),
        iva_pct=parse_pct_or_default(data.iva_pct, settings.DEFAULT_IVA_PCT),
        prov_pct=parse_pct_or_default(data.prov_pct, settings.DEFAULT_PROV_PCT),
        deb_cred_pct=parse_pct_or_default(data.deb_cred_pct, settings.DEFAULT_DEB_CRED_PCT),
    )
    db.add(carrera)
    await db.flush()
    await db.refresh(carrera)
    return carrera


_MONEY_FIELDS = {"ingreso_ars": "ingreso_ars_cents", "ingreso_usd": "ingreso_usd_cents"}
_PCT_FIELDS = ("mp_pct", "ib_pct", "iva_pct", "prov_pct", "deb_cred_pct")


async def update_carrera(
    db: AsyncSession, carrera_id: int, data: CarreraUpdate
) -> Carrera:
    """Partial update. Blank money/percent/date values leave the field as is."""
    carrera = await _get_or_raise(db, carrera_id)
    payload = data.model_dump(exclude_unset=True)
    changes: dict = {}

    if _clean(payload.get("nombre")):
        changes["nombre"] = _clean(payload["nombre"])
    if "lugar" in payload:
        changes["lugar"] = _clean(payload["lugar"]) or None
    if payload.get("tipo"):
        changes["tipo"] = payload["tipo"]
    if "corredores" in payload:
        changes["corredores"] = payload["corredores"]
    if "accesos" in payload:
        changes["accesos"] = payload["accesos"]

    if not _is_blank(payload.get("fecha")):
        fecha = parse_date_iso(payload["fecha"])
        if fecha is None:
            raise InvalidDate("fecha debe ser YYYY-MM-DD")
        changes["fecha"] = fecha

    for field, column in _MONEY_FIELDS.items():
        if not _is_blank(payload.get(field)):
            changes[column] = parse_money_to_cents(payload[field])
    for field in _PCT_FIELDS:
        if not _is_blank(payload.get(field)):
            changes[field] = parse_pct(payload[field])

    if not changes:
        raise ValueError("sin datos para actualizar")

    for key, value in changes.items():
        setattr(carrera, key, value)
    await db.flush()
    await db.refresh(carrera)
    return carrera


async def delete_carrera(db: AsyncSession, carrera_id: int) -> bool:
    """Delete an event together with every row that hangs from it."""
    carrera = await get_carrera(db, carrera_id)
    if carrera is None:
        return False

    for model in (CarreraVentaTipo, CarreraFotografo, GastoEspecifico, Transaccion):
        await db.execute(delete(model).where(model.carrera_id == carrera_id))
    await db.delete(carrera)
    await db.flush()
    return True


# --- Replace-on-write child sets ---


async def replace_ventas(
    db: AsyncSession, carrera_id: int, items: list[VentaTipoIn]
) -> list[CarreraVentaTipo]:
    """Replace every sale type of the event and refresh its revenue cache."""
    carrera = await _get_or_raise(db, carrera_id)

    await db.execute(
        delete(CarreraVentaTipo).where(CarreraVentaTipo.carrera_id == carrera_id)
    )
    db.add_all(
        CarreraVentaTipo(
            carrera_id=carrera_id,
            nombre=_clean(item.nombre),
            tipo=item.tipo,
            moneda=item.moneda,
            precio_cents=parse_money_to_cents(item.precio),
            cantidad=item.cantidad,
            comision_pct=parse_pct(item.comision_pct),
        )
        for item in items
        if _clean(item.nombre)
    )
    await db.flush()

    ventas = await get_ventas(db, carrera_id)
    carrera.ingreso_ars_cents, carrera.ingreso_usd_cents = revenue_by_currency(ventas)
    await db.flush()
    return ventas


async def _resolve_fotografo(db: AsyncSession, item: CarreraFotografoIn) -> Fotografo | None:
    """By id, then by exact name, then create by name. None if nothing to go on."""
    nombre = _clean(item.nombre)
    fotografo = None
    if item.fotografo_id:
        fotografo = await db.get(Fotografo, item.fotografo_id)
    if fotografo is None and nombre:
        fotografo = await catalog_service.get_or_create_fotografo(db, nombre)
    return fotografo


async def replace_fotografos(
    db: AsyncSession, carrera_id: int, items: list[CarreraFotografoIn]
) -> list[CarreraFotografo]:
    await _get_or_raise(db, carrera_id)

    existentes = await db.execute(
        select(func.count(CarreraFotografo.id)).where(
            CarreraFotografo.carrera_id == carrera_id
        )
    )
    existentes = existentes.scalar()

    cleaned: list[CarreraFotografo] = []
    for idx, item in enumerate(items):
        fotografo = await _resolve_fotografo(db, item)
        if fotografo is None:
            logger.warning(
                "Carrera %d: dropped photographer row %d (no id or name to resolve)",
                carrera_id, idx,
            )
            continue
        cleaned.append(
            CarreraFotografo(
                carrera_id=carrera_id,
                fotografo_id=fotografo.id,
                nombre=fotografo.nombre,
                costo_cents=parse_money_to_cents(item.costo),
                fotos_tomadas=item.fotos_tomadas,
                descargas=item.descargas,
                descargas_unicas=item.descargas_unicas,
                horas_trabajadas=_parse_horas(item.horas_trabajadas),
                facturo=item.facturo,
                pagado=item.pagado,
                rol=item.rol or None,
            )
        )

    if existentes > 0 and not cleaned:
        logger.warning(
            "Carrera %d: refused to replace %d photographers with an empty list",
            carrera_id, existentes,
        )
        raise EmptyReplacementGuard(
            "No podés dejar la carrera sin fotógrafos por error. Agregá al menos uno."
        )

    await db.execute(
        delete(CarreraFotografo).where(CarreraFotografo.carrera_id == carrera_id)
    )
    db.add_all(cleaned)
    await db.flush()
    return await get_fotografos(db, carrera_id)


async def replace_gastos_especificos(
    db: AsyncSession, carrera_id: int, items: list[GastoEspecificoIn]
) -> list[GastoEspecifico]:
    await _get_or_raise(db, carrera_id)

    await db.execute(
        delete(GastoEspecifico).where(GastoEspecifico.carrera_id == carrera_id)
    )
    db.add_all(
        GastoEspecifico(
            carrera_id=carrera_id,
            nombre=_clean(item.nombre),
            tipo=item.tipo or None,
            monto_cents=parse_money_to_cents(item.monto),
            pagado=item.pagado,
            facturado=item.facturado,
        )
        for item in items
        if _clean(item.nombre)
    )
    await db.flush()
    return await get_gastos_especificos(db, carrera_id)
