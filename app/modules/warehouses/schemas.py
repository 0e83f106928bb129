# app/modules/warehouses/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class WarehouseCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50, description="Código del depósito")
    description: str = Field(..., min_length=1, max_length=255, description="Descripción")
    address: Optional[str] = Field(None, description="Dirección")


class WarehouseUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None

    @validator('description')
    def description_not_null(cls, v):
        # address se puede borrar con null; description no
        if v is None:
            raise ValueError('La descripción no puede ser nula')
        return v


class StockProduct(BaseModel):
    id: int
    code: str
    name: str
    status: str
    allow_negative_stock: bool

    class Config:
        from_attributes = True


class WarehouseStock(BaseModel):
    id: int
    product_id: int
    quantity: int
    previous_quantity: int
    previous_changed_at: datetime
    product: Optional[StockProduct] = None

    class Config:
        from_attributes = True


class WarehouseDetail(BaseModel):
    id: int
    code: str
    description: str
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    stocks: Optional[List[WarehouseStock]] = None

    class Config:
        from_attributes = True


class WarehouseResponse(BaseResponse):
    warehouse: WarehouseDetail


class WarehouseListResponse(BaseResponse):
    warehouses: List[WarehouseDetail]
