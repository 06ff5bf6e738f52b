from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UsuarioResponse(BaseModel):
    id: int
    email: str
    nombre: str | None
    is_active: bool

    model_config = {"from_attributes": True}
