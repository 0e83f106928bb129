from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session, joinedload
from typing import List

from app.config.database import get_db
from app.shared.database.models import User
from app.core.auth.service import AuthService

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Obtener usuario actual desde el token"""

    if credentials is None:
        raise AuthenticationError("Token requerido")

    # Verificar token
    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Token inválido o expirado")

    user_id = payload.get("user_id")
    if user_id is None:
        raise AuthenticationError("Payload del token inválido")

    user = (
        db.query(User)
        .options(joinedload(User.role))
        .filter(User.id == user_id)
        .first()
    )

    if user is None:
        raise AuthenticationError("Usuario no encontrado")

    if not user.is_active:
        raise AuthenticationError("Usuario inactivo")

    return user


def require_roles(allowed_roles: List[str]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role_name not in allowed_roles:
            raise AuthorizationError(
                f"Rol '{current_user.role_name}' no autorizado. Roles permitidos: {allowed_roles}"
            )
        return current_user
    return role_checker


def get_admin_user(current_user: User = Depends(require_roles([ADMIN_ROLE]))) -> User:
    """Dependency para administradores"""
    return current_user
