from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import ApiResponse
from app.schemas.fotografo import (
    FotografoCreate,
    FotografoDetail,
    FotografoListItem,
    FotografoResponse,
    FotografoUpdate,
    RankingEntryResponse,
)
from app.services import fotografo_service
from app.services.ranking import RankingComponents

router = APIRouter(prefix="/fotografos", tags=["fotografos"])


@router.get("")
async def list_fotografos(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[FotografoListItem]]:
    items = await fotografo_service.list_fotografos(db)
    return ApiResponse.ok(items, meta={"total": len(items)})


# Declared before /{fotografo_id} so "ranking" is not parsed as an id
@router.get("/ranking")
async def get_ranking(
    carrera_id: int | None = Query(None),
    include_volumen: bool = Query(True),
    include_descargas: bool = Query(True),
    include_eficiencia: bool = Query(True),
    include_reach: bool = Query(True),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[RankingEntryResponse]]:
    components = RankingComponents(
        volumen=include_volumen,
        descargas=include_descargas,
        eficiencia=include_eficiencia,
        reach=include_reach,
    )
    entries = await fotografo_service.get_ranking(db, carrera_id, components)
    return ApiResponse.ok(
        [RankingEntryResponse.model_validate(e) for e in entries],
        meta={"carrera_id": carrera_id, "total": len(entries)},
    )


@router.get("/{fotografo_id}")
async def get_fotografo(
    fotografo_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[FotografoDetail]:
    detail = await fotografo_service.get_fotografo_detail(db, fotografo_id)
    if detail is None:
        return ApiResponse.fail(f"Fotógrafo con id {fotografo_id} no encontrado")
    return ApiResponse.ok(detail)


@router.post("")
async def create_fotografo(
    body: FotografoCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[FotografoResponse]:
    try:
        fotografo = await fotografo_service.create_fotografo(db, body)
        return ApiResponse.ok(FotografoResponse.model_validate(fotografo))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.put("/{fotografo_id}")
async def update_fotografo(
    fotografo_id: int,
    body: FotografoUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[FotografoResponse]:
    try:
        fotografo = await fotografo_service.update_fotografo(db, fotografo_id, body)
    except ValueError as e:
        return ApiResponse.fail(str(e))
    if fotografo is None:
        return ApiResponse.fail(f"Fotógrafo con id {fotografo_id} no encontrado")
    return ApiResponse.ok(FotografoResponse.model_validate(fotografo))


@router.delete("/{fotografo_id}")
async def delete_fotografo(
    fotografo_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    deleted = await fotografo_service.delete_fotografo(db, fotografo_id)
    if not deleted:
        return ApiResponse.fail(f"Fotógrafo con id {fotografo_id} no encontrado")
    return ApiResponse.ok(None)
