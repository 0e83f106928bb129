# app/modules/users/service.py
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.core.auth.service import AuthService
from app.shared.database.models import User
from app.shared.schemas.common import RoleInfo, UserInfo
from .repository import UsersRepository
from .schemas import (
    UserCreate, UserUpdate, PasswordReset,
    UserResponse, UserListResponse, RoleListResponse
)

logger = logging.getLogger(__name__)


class UsersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def get_users(self) -> UserListResponse:
        users = self.repository.get_all()
        return UserListResponse(
            success=True,
            message="Usuarios recuperados",
            users=[UserInfo.model_validate(u) for u in users]
        )

    async def get_user(self, user_id: int) -> UserResponse:
        return UserResponse(
            success=True,
            message="Usuario recuperado",
            user=UserInfo.model_validate(self._get_or_404(user_id))
        )

    async def get_roles(self) -> RoleListResponse:
        return RoleListResponse(
            success=True,
            message="Roles recuperados",
            roles=[RoleInfo.model_validate(r) for r in self.repository.get_roles()]
        )

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        if self.repository.get_by_email(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email ya está en uso"
            )
        self._ensure_role(user_data.role_id)

        try:
            user = User(
                name=user_data.name,
                lastname=user_data.lastname,
                email=user_data.email,
                password_hash=AuthService.get_password_hash(user_data.password),
                role_id=user_data.role_id,
                is_active=user_data.is_active
            )
            self.db.add(user)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error creando usuario")
            raise HTTPException(status_code=500, detail=f"[Users - CREATE]: {str(e)}")

        logger.info(f"✅ Usuario #{user.id} creado: {user.email}")
        return UserResponse(
            success=True,
            message="Usuario creado",
            user=UserInfo.model_validate(self._get_or_404(user.id))
        )

    async def update_user(self, user_id: int, user_data: UserUpdate) -> UserResponse:
        user = self._get_or_404(user_id)
        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)

        if 'role_id' in changes:
            self._ensure_role(changes['role_id'])

        password = changes.pop('password', None)
        if password:
            user.password_hash = AuthService.get_password_hash(password)

        for field, value in changes.items():
            setattr(user, field, value)

        self.db.commit()

        return UserResponse(
            success=True,
            message="Usuario actualizado",
            user=UserInfo.model_validate(self._get_or_404(user_id))
        )

    async def reset_password(self, user_id: int, data: PasswordReset) -> UserResponse:
        user = self._get_or_404(user_id)
        user.password_hash = AuthService.get_password_hash(data.password)
        self.db.commit()
        logger.info(f"🔑 Contraseña reiniciada para usuario #{user_id}")

        return UserResponse(
            success=True,
            message="Contraseña actualizada",
            user=UserInfo.model_validate(self._get_or_404(user_id))
        )

    async def delete_user(self, user_id: int, current_user: User) -> UserResponse:
        if user_id == current_user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No puedes eliminar tu propio usuario"
            )

        user = self._get_or_404(user_id)
        if self.repository.has_transfers(user_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"El usuario {user_id} tiene transferencias registradas"
            )

        info = UserInfo.model_validate(user)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"🗑️ Usuario #{user_id} eliminado")

        return UserResponse(
            success=True,
            message="Usuario eliminado",
            user=info
        )

    def _ensure_role(self, role_id: int) -> None:
        if not self.repository.get_role(role_id):
            raise HTTPException(status_code=404, detail=f"Rol {role_id} no encontrado")

    def _get_or_404(self, user_id: int) -> User:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=404, detail=f"Usuario {user_id} no encontrado")
        return user
