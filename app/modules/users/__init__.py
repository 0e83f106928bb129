# app/modules/users/__init__.py
"""
Módulo de Usuarios - Administración de usuarios y roles (solo ADMIN)
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository"
]
