from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args=_connect_args(settings.DATABASE_URL),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async database session.

    One request is one transaction: replace-on-write sequences and bulk
    import/reset either commit together or roll back together.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind=None) -> None:
    """Create all tables and enable WAL mode on SQLite."""
    from sqlalchemy import text

    from app.models import (  # noqa: F401 - ensure models are registered
        Carrera,
        CarreraFotografo,
        CarreraVentaTipo,
        Cuenta,
        Fotografo,
        GastoEspecifico,
        TipoMovimiento,
        Transaccion,
        Usuario,
    )
    from app.models.base import Base

    bind = bind or engine
    async with bind.begin() as conn:
        if conn.dialect.name == "sqlite":
            await conn.execute(text("PRAGMA journal_mode=WAL"))
        await conn.run_sync(Base.metadata.create_all)
