# app/modules/pricelists/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas.common import BaseResponse, CategoryInfo, UnitInfo, WarehouseInfo


class PriceListCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=255)


class PriceListUpdate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)


class PriceCreate(BaseModel):
    product_id: int = Field(..., ge=0, alias="productId")
    price: Decimal = Field(..., gt=0, description="Precio unitario")

    class Config:
        populate_by_name = True


class PriceDetail(BaseModel):
    id: int
    price_list_id: int
    product_id: int
    price: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class PriceListInfo(BaseModel):
    id: int
    code: str
    description: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PricedProduct(BaseModel):
    """Producto con su último precio y el stock en el depósito consultado"""
    id: int
    code: str
    barcode: str
    name: str
    description: Optional[str] = None
    status: str
    allow_negative_stock: bool
    price: Decimal
    stock: int
    category: Optional[CategoryInfo] = None
    unit: Optional[UnitInfo] = None
    warehouse: WarehouseInfo


class PriceListWarehouseDetail(PriceListInfo):
    products: List[PricedProduct] = []


class PriceListWarehouseProductDetail(PriceListInfo):
    product: Optional[PricedProduct] = None


class PriceListResponse(BaseResponse):
    pricelist: PriceListInfo


class PriceListListResponse(BaseResponse):
    pricelists: List[PriceListInfo]


class PriceResponse(BaseResponse):
    price: PriceDetail


class PriceListWarehouseResponse(BaseResponse):
    pricelist: PriceListWarehouseDetail


class PriceListWarehouseProductResponse(BaseResponse):
    pricelist: PriceListWarehouseProductDetail
