# app/modules/stocks/service.py
from typing import Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.shared.services.stock_ledger import StockLedger
from .schemas import StockDetail, StockResponse, StockListResponse


class StocksService:
    def __init__(self, db: Session):
        self.db = db
        self.ledger = StockLedger(db)

    async def get_stocks(
        self,
        warehouse_id: Optional[int] = None,
        product_id: Optional[int] = None
    ) -> StockListResponse:
        entries = self.ledger.list_entries(warehouse_id=warehouse_id, product_id=product_id)
        return StockListResponse(
            success=True,
            message="Stock recuperado",
            stocks=[StockDetail.model_validate(e) for e in entries],
            total=len(entries)
        )

    async def get_low_stock(self, warehouse_id: Optional[int] = None) -> StockListResponse:
        """Productos con alerta de stock bajo activa que están en o por debajo del mínimo"""
        entries = self.ledger.low_stock_entries(warehouse_id=warehouse_id)
        return StockListResponse(
            success=True,
            message=f"{len(entries)} productos con stock bajo",
            stocks=[StockDetail.model_validate(e) for e in entries],
            total=len(entries)
        )

    async def get_stock(self, product_id: int, warehouse_id: int) -> StockResponse:
        entry = self.ledger.get_entry(product_id, warehouse_id)
        if not entry:
            raise HTTPException(
                status_code=404,
                detail=f"No existe stock del producto {product_id} en el depósito {warehouse_id}"
            )

        return StockResponse(
            success=True,
            message="Stock recuperado",
            stock=StockDetail.model_validate(entry)
        )
