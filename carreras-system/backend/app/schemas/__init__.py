from app.schemas.common import ApiResponse, Cents, Pct
from app.schemas.carrera import (
    CarreraCalculoResponse,
    CarreraCreate,
    CarreraDetail,
    CarreraListItem,
    CarreraResponse,
    CarreraUpdate,
)
from app.schemas.fotografo import (
    FotografoCreate,
    FotografoDetail,
    FotografoListItem,
    FotografoResponse,
    FotografoUpdate,
    RankingEntryResponse,
)
from app.schemas.caja import MovimientoCreate, MovimientoResponse, MovimientoUpdate
from app.schemas.user import LoginRequest, UsuarioResponse

__all__ = [
    "ApiResponse",
    "Cents",
    "Pct",
    "CarreraCalculoResponse",
    "CarreraCreate",
    "CarreraDetail",
    "CarreraListItem",
    "CarreraResponse",
    "CarreraUpdate",
    "FotografoCreate",
    "FotografoDetail",
    "FotografoListItem",
    "FotografoResponse",
    "FotografoUpdate",
    "RankingEntryResponse",
    "MovimientoCreate",
    "MovimientoResponse",
    "MovimientoUpdate",
    "LoginRequest",
    "UsuarioResponse",
]
