# app/modules/users/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List, Optional

from app.shared.schemas.common import BaseResponse, RoleInfo, UserInfo


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre")
    lastname: str = Field(..., min_length=1, max_length=255, description="Apellido")
    email: str = Field(..., min_length=3, max_length=255, description="Email único del usuario")
    password: str = Field(..., min_length=6, description="Contraseña (mínimo 6 caracteres)")
    role_id: int = Field(..., ge=0, description="Rol del usuario")
    is_active: bool = True

    @validator('email')
    def normalize_email(cls, v):
        return v.strip().lower()


class UserUpdate(BaseModel):
    """El email no se modifica; la contraseña es opcional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    lastname: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=6)
    role_id: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class PasswordReset(BaseModel):
    password: str = Field(..., min_length=6, description="Nueva contraseña")


class UserResponse(BaseResponse):
    user: UserInfo


class UserListResponse(BaseResponse):
    users: List[UserInfo]


class RoleListResponse(BaseResponse):
    roles: List[RoleInfo]
