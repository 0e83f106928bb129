# app/modules/stocks/__init__.py
"""
Módulo de Stock - Consulta de cantidades por producto y depósito

Las escrituras de stock pasan por StockLedger (app/shared/services/stock_ledger.py).
"""

from .router import router
from .service import StocksService

__all__ = [
    "router",
    "StocksService"
]
