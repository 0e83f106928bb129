from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session, joinedload
import logging

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse
from app.core.auth.dependencies import get_current_user
from app.shared.database.models import User
from app.shared.schemas.common import UserInfo

router = APIRouter()

logger = logging.getLogger(__name__)


def _authenticate(db: Session, email: str, password: str) -> TokenResponse:
    user = (
        db.query(User)
        .options(joinedload(User.role))
        .filter(User.email == email)
        .first()
    )

    if not user or not AuthService.verify_password(password, user.password_hash):
        logger.info(f"Login fallido para {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo"
        )

    access_token = AuthService.create_user_token(user)

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserInfo.model_validate(user)
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Endpoint de login para obtener token de acceso

    **Parámetros:**
    - **username**: Email del usuario
    - **password**: Contraseña del usuario
    """
    return _authenticate(db, form_data.username, form_data.password)


@router.post("/login-json", response_model=TokenResponse)
async def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Endpoint de login alternativo que acepta JSON

    **Body:**
    ```json
        {
            "email": "user@example.com",
            "password": "password123"
        }
    ```
    """
    return _authenticate(db, user_login.email, user_login.password)


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Obtener información del usuario actual

    **Headers requeridos:**
    - Authorization: Bearer {token}
    """
    return UserInfo.model_validate(current_user)
