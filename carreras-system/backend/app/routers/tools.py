"""Backup and export tools: JSON snapshot export / import, reset, XLSX export."""

from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.excel import build_carreras_workbook
from app.schemas.common import ApiResponse
from app.schemas.tools import BackupSnapshot, ImportResult
from app.services import backup_service, carrera_service

router = APIRouter(prefix="/admin", tags=["tools"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/export")
async def export_snapshot(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[BackupSnapshot]:
    snapshot = await backup_service.export_snapshot(db)
    return ApiResponse.ok(snapshot)


@router.post("/import")
async def import_snapshot(
    body: BackupSnapshot,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ImportResult]:
    try:
        counts = await backup_service.import_snapshot(db, body)
        return ApiResponse.ok(ImportResult(counts=counts))
    except ValueError as e:
        return ApiResponse.fail(str(e))


@router.post("/reset")
async def reset(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ImportResult]:
    counts = await backup_service.reset_all(db)
    return ApiResponse.ok(ImportResult(counts=counts))


@router.get("/export/carreras.xlsx")
async def export_carreras_xlsx(
    db: AsyncSession = Depends(get_db),
) -> Response:
    rows = await carrera_service.list_carreras(db)
    content = build_carreras_workbook(rows)
    filename = f"carreras_{date.today().isoformat()}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
