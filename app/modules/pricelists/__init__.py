# app/modules/pricelists/__init__.py
"""
Módulo de Listas de Precio

Los precios se guardan como histórico por lista y producto; las consultas
por depósito devuelven el último precio junto con el stock disponible.
"""

from .router import router
from .service import PriceListsService
from .repository import PriceListsRepository

__all__ = [
    "router",
    "PriceListsService",
    "PriceListsRepository"
]
