from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.common import ApiResponse
from app.schemas.user import LoginRequest, UsuarioResponse
from app.utils.auth import (
    create_session,
    destroy_session,
    validate_session,
    verify_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    carreras_session: str | None = Cookie(None),
) -> Usuario | None:
    """Dependency that returns the current authenticated user.

    With AUTH_OFF set every request passes and no user is attached.
    """
    if settings.AUTH_OFF:
        return None
    if carreras_session is None:
        raise _unauthorized()

    session_data = validate_session(carreras_session)
    if session_data is None:
        raise _unauthorized()

    result = await db.execute(
        select(Usuario).where(
            Usuario.id == session_data["usuario_id"], Usuario.is_active.is_(True)
        )
    )
    usuario = result.scalar_one_or_none()
    if usuario is None:
        raise _unauthorized()
    return usuario


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail="No autenticado")


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UsuarioResponse]:
    email = body.email.strip().lower()
    result = await db.execute(select(Usuario).where(Usuario.email == email))
    usuario = result.scalar_one_or_none()

    if usuario is None or not verify_password(body.password, usuario.password_hash):
        return ApiResponse.fail("Email o contraseña inválidos")

    if not usuario.is_active:
        return ApiResponse.fail("Usuario deshabilitado")

    token = create_session(usuario.id, usuario.email)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return ApiResponse.ok(UsuarioResponse.model_validate(usuario))


@router.post("/logout")
async def logout(
    response: Response,
    carreras_session: str | None = Cookie(None),
) -> ApiResponse[None]:
    if carreras_session:
        destroy_session(carreras_session)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return ApiResponse.ok(None)


@router.get("/me")
async def get_me(
    usuario: Usuario | None = Depends(get_current_user),
) -> ApiResponse[UsuarioResponse]:
    if usuario is None:
        return ApiResponse.fail("Autenticación deshabilitada")
    return ApiResponse.ok(UsuarioResponse.model_validate(usuario))
