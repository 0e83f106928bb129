from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.config.settings import settings
from app.shared.database.models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt ignora todo lo que pase de 72 bytes
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')


class AuthService:
    """Contraseñas de usuarios y tokens de acceso"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(_truncate(plain_password), hashed_password)
        except ValueError as e:
            logger.warning(f"Hash de contraseña inválido: {str(e)}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(_truncate(password))

    @staticmethod
    def create_user_token(user: User) -> str:
        """
        Token de acceso para el usuario.

        El payload lleva user_id (lo que usa get_current_user), email y rol;
        vence a los `access_token_expire_minutes` de la configuración.
        """
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
        payload = {
            "user_id": user.id,
            "email": user.email,
            "role": user.role_name,
            "exp": expire
        }
        return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Payload del token, o None si es inválido o venció"""
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None
