import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import async_session_factory, init_db
from app.routers import auth, caja, carreras, fotografos, tools
from app.routers.auth import get_current_user
from app.services.catalog_service import seed_catalogs

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def _seed_catalogs() -> None:
    """Movement-type catalog, default cash account and bootstrap admin."""
    async with async_session_factory() as session:
        await seed_catalogs(session)
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    await init_db()
    await _seed_catalogs()
    if settings.AUTH_OFF:
        logger.warning("AUTH_OFF is set: API routes are not authenticated")
    yield
    # Shutdown (nothing to clean up)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers under /api/v1
API_PREFIX = "/api/v1"
protected = [Depends(get_current_user)]
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(carreras.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(fotografos.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(caja.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(tools.router, prefix=API_PREFIX, dependencies=protected)


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok", "version": settings.APP_VERSION}
