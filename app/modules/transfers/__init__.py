# app/modules/transfers/__init__.py
"""
Módulo de Transferencias - Movimiento de stock entre depósitos

Este módulo maneja las transferencias de productos:
- Alta de transferencia con carrito de varios productos
- Resta en depósito origen y suma en depósito destino en una sola transacción
- Consulta de transferencias con sus líneas

Arquitectura:
- router.py: Endpoints de transferencias
- service.py: Orquestación y mapeo de errores
- processor.py: Movimiento de stock consistente
- repository.py: Consultas de transferencias
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import TransfersService
from .processor import TransferProcessor, CartLine
from .repository import TransfersRepository

__all__ = [
    "router",
    "TransfersService",
    "TransferProcessor",
    "CartLine",
    "TransfersRepository"
]
