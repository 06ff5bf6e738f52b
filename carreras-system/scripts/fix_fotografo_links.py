"""Repair photographer assignments that have a name but no photographer id.

Each such row is linked to the photographer with the same name, creating
the photographer when none exists.

Usage:
    cd carreras-system
    python scripts/fix_fotografo_links.py
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

from app.database import async_session_factory, init_db
from app.services.fotografo_service import repair_fotografo_links


async def main() -> None:
    await init_db()
    async with async_session_factory() as session:
        try:
            linked = await repair_fotografo_links(session)
            for assignment_id, fotografo_id in linked:
                print(f"CarreraFotografo {assignment_id} -> fotografo_id={fotografo_id}")
            await session.commit()
            print(f"Rows repaired: {len(linked)}")
        except Exception as e:
            await session.rollback()
            print(f"\nERROR: Repair failed: {e}")
            raise


if __name__ == "__main__":
    asyncio.run(main())
