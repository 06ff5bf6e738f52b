"""Seed script.

Creates the tables and the baseline rows the API expects: the
movement-type catalog, the default cash account and the bootstrap admin
user. Safe to run any number of times.

Usage:
    cd carreras-system
    python scripts/seed.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add backend to path so we can import app modules
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_DIR = SCRIPT_DIR.parent
BACKEND_DIR = PROJECT_DIR / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from app.config import settings
from app.database import async_session_factory, init_db
from app.services import catalog_service


async def main() -> None:
    print("=" * 60)
    print("Carreras Admin - Seed")
    print("=" * 60)
    print(f"Database: {settings.DATABASE_URL}")
    print()

    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    await init_db()

    async with async_session_factory() as session:
        try:
            created = await catalog_service.seed_tipos_movimiento(session)
            print(f"Movement types created: {created}")

            cuenta = await catalog_service.get_or_create_default_cuenta(session)
            print(f"Default account: {cuenta.nombre} (id {cuenta.id})")

            await catalog_service.seed_admin(session)
            print(f"Admin user: {settings.ADMIN_EMAIL}")

            await session.commit()
            print()
            print("Seed completed successfully!")
        except Exception as e:
            await session.rollback()
            print(f"\nERROR: Seed failed: {e}")
            raise


if __name__ == "__main__":
    asyncio.run(main())
