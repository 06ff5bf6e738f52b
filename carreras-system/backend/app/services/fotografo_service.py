import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.carrera import Carrera
from app.models.fotografo import CarreraFotografo, Fotografo
from app.schemas.fotografo import (
    FotografoCarreraDetalle,
    FotografoCreate,
    FotografoDetail,
    FotografoKpis,
    FotografoListItem,
    FotografoResponse,
    FotografoUpdate,
)
from app.services import catalog_service
from app.services.ranking import (
    FotografoTotales,
    RankingComponents,
    RankingEntry,
    rank_fotografos,
)

logger = logging.getLogger(__name__)


def _pct(numerator: int, denominator: int) -> float | None:
    return numerator / denominator * 100 if denominator > 0 else None


def _kpis(
    carreras: int, fotos: int, descargas: int, unicas: int, costo_cents: int
) -> FotografoKpis:
    return FotografoKpis(
        carreras=carreras,
        fotos_totales=fotos,
        descargas_totales=descargas,
        descargas_unicas=unicas,
        costo_total_cents=costo_cents,
        pct_desc_fotos=_pct(descargas, fotos),
        pct_uni_desc=_pct(unicas, descargas),
    )


async def get_fotografo(db: AsyncSession, fotografo_id: int) -> Fotografo | None:
    result = await db.execute(select(Fotografo).where(Fotografo.id == fotografo_id))
    return result.scalar_one_or_none()


async def list_fotografos(db: AsyncSession) -> list[FotografoListItem]:
    """All photographers, alphabetically, with KPIs over every assignment."""
    result = await db.execute(select(Fotografo).order_by(Fotografo.nombre, Fotografo.id))
    fotografos = list(result.scalars().all())

    totals = await db.execute(
        select(
            CarreraFotografo.fotografo_id,
            func.count(CarreraFotografo.id),
            func.coalesce(func.sum(CarreraFotografo.fotos_tomadas), 0),
            func.coalesce(func.sum(CarreraFotografo.descargas), 0),
            func.coalesce(func.sum(CarreraFotografo.descargas_unicas), 0),
            func.coalesce(func.sum(CarreraFotografo.costo_cents), 0),
        )
        .where(CarreraFotografo.fotografo_id.is_not(None))
        .group_by(CarreraFotografo.fotografo_id)
    )
    by_id = {row[0]: [int(v or 0) for v in row[1:]] for row in totals.all()}

    items = []
    for f in fotografos:
        counts = by_id.get(f.id, [0, 0, 0, 0, 0])
        items.append(
            FotografoListItem(
                **FotografoResponse.model_validate(f).model_dump(),
                kpis=_kpis(*counts),
            )
        )
    return items


async def get_fotografo_detail(db: AsyncSession, fotografo_id: int) -> FotografoDetail | None:
    fotografo = await get_fotografo(db, fotografo_id)
    if fotografo is None:
        return None

    result = await db.execute(
        select(CarreraFotografo, Carrera.nombre, Carrera.fecha)
        .select_from(CarreraFotografo)
        .outerjoin(Carrera, Carrera.id == CarreraFotografo.carrera_id)
        .where(CarreraFotografo.fotografo_id == fotografo_id)
        .order_by(Carrera.fecha.desc(), CarreraFotografo.id)
    )

    detalle = []
    fotos = descargas = unicas = costo = 0
    for cf, carrera_nombre, carrera_fecha in result.all():
        fotos += cf.fotos_tomadas
        descargas += cf.descargas
        unicas += cf.descargas_unicas
        costo += cf.costo_cents
        detalle.append(
            FotografoCarreraDetalle(
                id=cf.id,
                carrera_id=cf.carrera_id,
                carrera_nombre=carrera_nombre,
                carrera_fecha=carrera_fecha,
                rol=cf.rol,
                fotos=cf.fotos_tomadas,
                descargas=cf.descargas,
                descargas_unicas=cf.descargas_unicas,
                costo_cents=cf.costo_cents,
                facturo=cf.facturo,
                pagado=cf.pagado,
                horas_trabajadas=cf.horas_trabajadas,
                pct_desc_fotos=_pct(cf.descargas, cf.fotos_tomadas),
                pct_uni_desc=_pct(cf.descargas_unicas, cf.descargas),
            )
        )

    kpis = _kpis(len(detalle), fotos, descargas, unicas, costo)
    # Cost is stored in cents; the per-download figure is in currency units
    kpis.costo_por_descarga = costo / 100 / descargas if descargas > 0 else None

    return FotografoDetail(
        **FotografoResponse.model_validate(fotografo).model_dump(),
        carreras=detalle,
        kpis=kpis,
    )


async def get_ranking(
    db: AsyncSession,
    carrera_id: int | None = None,
    components: RankingComponents = RankingComponents(),
) -> list[RankingEntry]:
    """Rank photographers over all events, or over one event when given."""
    query = (
        select(
            Fotografo.id,
            Fotografo.nombre,
            func.coalesce(func.sum(CarreraFotografo.fotos_tomadas), 0),
            func.coalesce(func.sum(CarreraFotografo.descargas), 0),
            func.coalesce(func.sum(CarreraFotografo.descargas_unicas), 0),
        )
        .select_from(CarreraFotografo)
        .join(Fotografo, Fotografo.id == CarreraFotografo.fotografo_id)
        .group_by(Fotografo.id, Fotografo.nombre)
    )
    if carrera_id is not None:
        query = query.where(CarreraFotografo.carrera_id == carrera_id)

    result = await db.execute(query)
    totales = [
        FotografoTotales(
            fotografo_id=fid,
            nombre=nombre,
            fotos_totales=int(fotos),
            descargas_totales=int(descargas),
            descargas_unicas_totales=int(unicas),
        )
        for fid, nombre, fotos, descargas, unicas in result.all()
    ]
    return rank_fotografos(totales, components)


async def create_fotografo(db: AsyncSession, data: FotografoCreate) -> Fotografo:
    nombre = data.nombre.strip()
    if not nombre:
        raise ValueError("nombre requerido")
    fotografo = Fotografo(nombre=nombre)
    db.add(fotografo)
    await db.flush()
    await db.refresh(fotografo)
    return fotografo


async def update_fotografo(
    db: AsyncSession, fotografo_id: int, data: FotografoUpdate
) -> Fotografo | None:
    fotografo = await get_fotografo(db, fotografo_id)
    if fotografo is None:
        return None

    payload = data.model_dump(exclude_unset=True)
    if not payload:
        raise ValueError("Sin datos para actualizar")
    for key, value in payload.items():
        if isinstance(value, str):
            value = value.strip() or None
        if key == "nombre" and not value:
            raise ValueError("nombre requerido")
        setattr(fotografo, key, value)

    await db.flush()
    await db.refresh(fotografo)
    return fotografo


async def delete_fotografo(db: AsyncSession, fotografo_id: int) -> bool:
    fotografo = await get_fotografo(db, fotografo_id)
    if fotografo is None:
        return False
    await db.execute(
        delete(CarreraFotografo).where(CarreraFotografo.fotografo_id == fotografo_id)
    )
    await db.delete(fotografo)
    await db.flush()
    logger.info("Deleted photographer %d with its assignments", fotografo_id)
    return True


async def repair_fotografo_links(db: AsyncSession) -> list[tuple[int, int]]:
    """Link legacy assignments that carry only a name to a photographer.

    Resolves by exact name, creating the photographer when missing. Rows
    without a name are left alone. Returns ``(assignment_id, fotografo_id)``
    pairs for every row that was linked.
    """
    result = await db.execute(
        select(CarreraFotografo)
        .where(CarreraFotografo.fotografo_id.is_(None))
        .order_by(CarreraFotografo.id)
    )
    linked = []
    for row in result.scalars().all():
        nombre = (row.nombre or "").strip()
        if not nombre:
            continue
        fotografo = await catalog_service.get_or_create_fotografo(db, nombre)
        row.fotografo_id = fotografo.id
        linked.append((row.id, fotografo.id))
    await db.flush()
    logger.info("Linked %d assignments to photographers", len(linked))
    return linked
