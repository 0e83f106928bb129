# app/modules/warehouses/__init__.py
"""
Módulo de Depósitos - Alta, consulta y baja de depósitos/almacenes

Al crear un depósito se registra stock en cero para todos los productos.
"""

from .router import router
from .service import WarehousesService
from .repository import WarehousesRepository

__all__ = [
    "router",
    "WarehousesService",
    "WarehousesRepository"
]
