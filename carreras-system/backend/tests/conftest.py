"""Shared fixtures: a fresh SQLite file database per test and an API client."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.database import get_db, init_db
from app.main import app
from app.models.carrera import Carrera
from app.routers.auth import get_current_user
from app.services.catalog_service import seed_catalogs


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session_factory(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    # The lifespan does not run under ASGITransport, so seed here
    async with factory() as session:
        await seed_catalogs(session)
        await session.commit()
    return factory


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


def _override_get_db(session_factory):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_db


@pytest.fixture
async def client(session_factory):
    """API client with authentication bypassed."""
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    app.dependency_overrides[get_current_user] = lambda: None
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(session_factory, monkeypatch):
    """API client that goes through the real session-cookie check."""
    monkeypatch.setattr(settings, "AUTH_OFF", False)
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def carrera(db):
    """An event with only MP and IB fees configured."""
    c = Carrera(
        nombre="Maratón de Prueba",
        fecha=date(2024, 5, 12),
        moneda_base="ARS",
        mp_pct=2,
        ib_pct=4,
    )
    db.add(c)
    await db.commit()
    return c


@pytest.fixture
def make_carrera(client):
    """Create an event through the API and return its JSON."""

    async def _make(**overrides) -> dict:
        payload = {"nombre": "Carrera API", "fecha": "2024-06-01"}
        payload.update(overrides)
        resp = await client.post("/api/v1/carreras", json=payload)
        body = resp.json()
        assert body["success"], body
        return body["data"]

    return _make
