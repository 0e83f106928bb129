# app/modules/stocks/schemas.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.shared.schemas.common import BaseResponse, WarehouseInfo


class StockProductInfo(BaseModel):
    id: int
    code: str
    name: str
    allow_negative_stock: bool
    alert_low_stock: bool
    low_stock: int

    class Config:
        from_attributes = True


class StockDetail(BaseModel):
    id: int
    product_id: int
    warehouse_id: int
    quantity: int
    previous_quantity: int
    previous_changed_at: datetime
    updated_at: datetime
    product: Optional[StockProductInfo] = None
    warehouse: Optional[WarehouseInfo] = None

    class Config:
        from_attributes = True


class StockResponse(BaseResponse):
    stock: StockDetail


class StockListResponse(BaseResponse):
    stocks: List[StockDetail]
    total: int
