# app/modules/products/__init__.py
"""
Módulo de Productos - Catálogo de productos, categorías y unidades
"""

from .router import router
from .service import ProductsService
from .repository import ProductsRepository

__all__ = [
    "router",
    "ProductsService",
    "ProductsRepository"
]
