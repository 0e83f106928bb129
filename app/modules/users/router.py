# app/modules/users/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user
from .service import UsersService
from .schemas import (
    UserCreate, UserUpdate, PasswordReset,
    UserResponse, UserListResponse, RoleListResponse
)

router = APIRouter()


@router.get("/roles", response_model=RoleListResponse)
async def get_roles(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_roles()


@router.get("/", response_model=UserListResponse)
async def get_users(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_user(user_id)


@router.post("/", response_model=UserResponse)
async def create_user(
    user_data: UserCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Crear usuario

    El email debe ser único; se responde 409 si ya está registrado.
    """
    service = UsersService(db)
    return await service.create_user(user_data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.update_user(user_id, user_data)


@router.put("/{user_id}/password", response_model=UserResponse)
async def reset_password(
    user_id: int,
    data: PasswordReset,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.reset_password(user_id, data)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: int,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.delete_user(user_id, current_user)
