"""Bulk export / import / reset of every business table.

A snapshot is plain JSON: one list of rows per table, parents first.
Import replaces everything in a single transaction. Rows are converted
before anything is deleted, so a malformed snapshot leaves the database
untouched.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, DateTime, Enum, Float, Integer, Numeric, delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.carrera import Carrera
from app.models.cuenta import Cuenta
from app.models.fotografo import CarreraFotografo, Fotografo
from app.models.gasto_especifico import GastoEspecifico
from app.models.transaccion import TipoMovimiento, Transaccion
from app.models.venta_tipo import CarreraVentaTipo
from app.schemas.tools import BackupSnapshot
from app.services import catalog_service

logger = logging.getLogger(__name__)

# Parents before children. Deletes walk this list backwards.
TABLES = [
    ("tipos_movimiento", TipoMovimiento),
    ("cuentas", Cuenta),
    ("fotografos", Fotografo),
    ("carreras", Carrera),
    ("carrera_venta_tipos", CarreraVentaTipo),
    ("carrera_fotografos", CarreraFotografo),
    ("gastos_especificos", GastoEspecifico),
    ("transacciones", Transaccion),
]


def _to_json(column, value):
    if value is None:
        return None
    col_type = column.type
    if isinstance(col_type, Enum):
        return value.value if hasattr(value, "value") else value
    if isinstance(col_type, BigInteger):
        return str(value)
    if isinstance(col_type, (Date, DateTime)):
        return value.isoformat()
    if isinstance(col_type, Float):
        return value
    if isinstance(col_type, Numeric):
        return str(value)
    return value


def _from_json(column, value):
    if value is None:
        return None
    col_type = column.type
    if isinstance(col_type, Enum):
        return col_type.enum_class(value) if col_type.enum_class else value
    if isinstance(col_type, (BigInteger, Integer)):
        return int(value)
    if isinstance(col_type, Boolean):
        return bool(value)
    if isinstance(col_type, DateTime):
        return datetime.fromisoformat(value)
    if isinstance(col_type, Date):
        return date.fromisoformat(value)
    if isinstance(col_type, Float):
        return float(value)
    if isinstance(col_type, Numeric):
        return Decimal(str(value))
    return value


def _build_rows(table: str, model, rows: list[dict]) -> list:
    columns = model.__table__.columns
    objects = []
    for idx, row in enumerate(rows):
        values = {}
        for column in columns:
            if column.key not in row:
                continue
            try:
                values[column.key] = _from_json(column, row[column.key])
            except (TypeError, ValueError, ArithmeticError) as e:
                raise ValueError(
                    f"{table}[{idx}].{column.key}: valor inválido ({e})"
                ) from None
        objects.append(model(**values))
    return objects


async def export_snapshot(db: AsyncSession) -> BackupSnapshot:
    data = {}
    for table, model in TABLES:
        columns = model.__table__.columns
        result = await db.execute(select(model).order_by(*model.__table__.primary_key.columns))
        data[table] = [
            {c.key: _to_json(c, getattr(obj, c.key)) for c in columns}
            for obj in result.scalars().all()
        ]
    return BackupSnapshot(**data)


async def _delete_all(db: AsyncSession) -> dict[str, int]:
    counts = {}
    for table, model in reversed(TABLES):
        result = await db.execute(delete(model))
        counts[table] = result.rowcount or 0
    return counts


async def _sync_sequences(db: AsyncSession) -> None:
    """Move PostgreSQL id sequences past explicitly imported ids."""
    if db.get_bind().dialect.name != "postgresql":
        return
    for table, model in TABLES:
        if not isinstance(model.__table__.c.id.type, Integer):
            continue
        await db.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"COALESCE((SELECT MAX(id) FROM {table}), 0) + 1, false)"
            )
        )


async def import_snapshot(db: AsyncSession, snapshot: BackupSnapshot) -> dict[str, int]:
    """Replace every business table with the snapshot's rows."""
    staged = [
        (table, _build_rows(table, model, getattr(snapshot, table)))
        for table, model in TABLES
    ]

    await _delete_all(db)
    counts = {}
    for table, objects in staged:
        db.add_all(objects)
        # Flush per table so parents exist before their children are inserted
        await db.flush()
        counts[table] = len(objects)
    await _sync_sequences(db)
    # Older snapshots may predate some catalog entries
    await catalog_service.seed_tipos_movimiento(db)

    logger.info("Imported snapshot: %s", counts)
    return counts


async def reset_all(db: AsyncSession) -> dict[str, int]:
    """Delete every business row and re-seed the catalogs."""
    counts = await _delete_all(db)
    await db.flush()
    await catalog_service.seed_catalogs(db)
    logger.info("Reset database: %s", counts)
    return counts
