# app/modules/products/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List, Literal, Optional
from datetime import datetime

from app.shared.schemas.common import BaseResponse, CategoryInfo, UnitInfo

ProductStatus = Literal['ENABLED', 'DISABLED']


class ProductCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=100)
    barcode: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: ProductStatus = 'ENABLED'
    allow_negative_stock: bool = False
    alert_low_stock: bool = False
    low_stock: int = Field(0, ge=0)
    category_id: int = Field(..., ge=0)
    unit_id: int = Field(..., ge=0)

    @validator('code', 'barcode', 'name')
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v.strip()


class ProductUpdate(BaseModel):
    barcode: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[ProductStatus] = None
    allow_negative_stock: Optional[bool] = None
    alert_low_stock: Optional[bool] = None
    low_stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = Field(None, ge=0)
    unit_id: Optional[int] = Field(None, ge=0)

    @validator('barcode', 'name', 'status', 'allow_negative_stock', 'alert_low_stock',
               'low_stock', 'category_id', 'unit_id')
    def not_null(cls, v):
        # Solo description admite null para borrarse
        if v is None:
            raise ValueError('El campo no puede ser nulo')
        return v


class ProductDetail(BaseModel):
    id: int
    code: str
    barcode: str
    name: str
    description: Optional[str] = None
    status: str
    allow_negative_stock: bool
    alert_low_stock: bool
    low_stock: int
    category_id: int
    unit_id: int
    category: Optional[CategoryInfo] = None
    unit: Optional[UnitInfo] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductResponse(BaseResponse):
    product: ProductDetail


class ProductListResponse(BaseResponse):
    products: List[ProductDetail]


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class UnitCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)


class CategoryListResponse(BaseResponse):
    categories: List[CategoryInfo]


class CategoryResponse(BaseResponse):
    category: CategoryInfo


class UnitListResponse(BaseResponse):
    units: List[UnitInfo]


class UnitResponse(BaseResponse):
    unit: UnitInfo
