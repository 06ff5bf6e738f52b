"""Catalog rows every other service relies on.

Seeding is explicit and idempotent: ``seed_catalogs`` runs once at startup
(and after a reset); read paths never create rows.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.cuenta import Cuenta
from app.models.fotografo import Fotografo
from app.models.transaccion import Alcance, TipoMovimiento
from app.models.usuario import Usuario
from app.utils.auth import hash_password

logger = logging.getLogger(__name__)

TIPOS_MOVIMIENTO_DEFAULTS: list[dict] = [
    # Event-scoped fee types
    {"id": "costo_mercadopago", "nombre": "Costo Mercado Pago", "grupo": "variable", "alcance": Alcance.CARRERA},
    {"id": "ingresos_brutos", "nombre": "Ingresos Brutos", "grupo": "variable", "alcance": Alcance.CARRERA},
    {"id": "iva", "nombre": "IVA", "grupo": "variable", "alcance": Alcance.CARRERA},
    {"id": "comision_proveedor", "nombre": "Comisión Proveedor", "grupo": "variable", "alcance": Alcance.CARRERA},
    {"id": "comision_org_pre", "nombre": "Comisión Organizador (Preventa)", "grupo": "variable", "alcance": Alcance.CARRERA},
    {"id": "comision_org_post", "nombre": "Comisión Organizador (Post)", "grupo": "variable", "alcance": Alcance.CARRERA},
    # Global ledger (caja) types
    {"id": "gasto_fijo", "nombre": "Gasto fijo", "grupo": "fijo", "alcance": Alcance.GLOBAL},
    {"id": "gasto_operativo", "nombre": "Gasto operativo", "grupo": "variable", "alcance": Alcance.GLOBAL},
    {"id": "inversion", "nombre": "Inversión", "grupo": "inversion", "alcance": Alcance.GLOBAL},
    {"id": "adelanto_socio", "nombre": "Adelanto a socio", "grupo": "deuda", "alcance": Alcance.GLOBAL},
    {"id": "deuda", "nombre": "Deuda / préstamo", "grupo": "deuda", "alcance": Alcance.GLOBAL},
]


async def seed_tipos_movimiento(db: AsyncSession) -> int:
    """Insert missing catalog entries. Existing rows are left untouched."""
    result = await db.execute(select(TipoMovimiento.id))
    existing = set(result.scalars().all())

    created = 0
    for tipo in TIPOS_MOVIMIENTO_DEFAULTS:
        if tipo["id"] in existing:
            continue
        db.add(TipoMovimiento(**tipo))
        created += 1
    if created:
        await db.flush()
        logger.info("Seeded %d movement types", created)
    return created


async def get_tipo_movimiento(db: AsyncSession, tipo_id: str) -> TipoMovimiento | None:
    result = await db.execute(
        select(TipoMovimiento).where(TipoMovimiento.id == tipo_id)
    )
    return result.scalar_one_or_none()


async def get_or_create_default_tipo(db: AsyncSession) -> TipoMovimiento:
    """Movement type used when a caja movement arrives without one."""
    tipo = await get_tipo_movimiento(db, settings.DEFAULT_TIPO_MOVIMIENTO)
    if tipo is not None:
        return tipo
    defaults = next(
        t for t in TIPOS_MOVIMIENTO_DEFAULTS
        if t["id"] == settings.DEFAULT_TIPO_MOVIMIENTO
    )
    tipo = TipoMovimiento(**defaults)
    db.add(tipo)
    await db.flush()
    return tipo


async def get_or_create_default_cuenta(db: AsyncSession) -> Cuenta:
    """The home-currency cash account, created on first use."""
    result = await db.execute(
        select(Cuenta).where(Cuenta.nombre == settings.DEFAULT_ACCOUNT_NAME)
    )
    cuenta = result.scalar_one_or_none()
    if cuenta is not None:
        return cuenta

    has_default = await db.execute(
        select(Cuenta.id).where(Cuenta.is_default.is_(True)).limit(1)
    )
    cuenta = Cuenta(
        nombre=settings.DEFAULT_ACCOUNT_NAME,
        moneda=settings.HOME_CURRENCY,
        descripcion="Caja principal",
        is_default=has_default.scalar_one_or_none() is None,
    )
    db.add(cuenta)
    await db.flush()
    await db.refresh(cuenta)
    logger.info("Created default account %r", cuenta.nombre)
    return cuenta


async def seed_admin(db: AsyncSession) -> None:
    """Create the bootstrap admin user if no users exist."""
    result = await db.execute(select(Usuario).limit(1))
    if result.scalar_one_or_none() is not None:
        return

    db.add(
        Usuario(
            email=settings.ADMIN_EMAIL.strip().lower(),
            nombre="admin",
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            is_active=True,
        )
    )
    await db.flush()
    logger.info("Created bootstrap admin %s", settings.ADMIN_EMAIL)


async def seed_catalogs(db: AsyncSession) -> None:
    await seed_tipos_movimiento(db)
    await get_or_create_default_cuenta(db)
    await seed_admin(db)


# --- Fotografo lookup ---


async def find_fotografo_by_nombre(db: AsyncSession, nombre: str) -> Fotografo | None:
    result = await db.execute(
        select(Fotografo).where(Fotografo.nombre == nombre).order_by(Fotografo.id).limit(1)
    )
    return result.scalar_one_or_none()


async def get_or_create_fotografo(db: AsyncSession, nombre: str) -> Fotografo:
    fotografo = await find_fotografo_by_nombre(db, nombre)
    if fotografo is not None:
        return fotografo
    fotografo = Fotografo(nombre=nombre)
    db.add(fotografo)
    await db.flush()
    logger.info("Created photographer %r (id %d)", nombre, fotografo.id)
    return fotografo
