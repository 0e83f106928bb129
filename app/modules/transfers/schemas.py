# app/modules/transfers/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.shared.schemas.common import BaseResponse, UserInfo, WarehouseInfo, CategoryInfo, UnitInfo


class CartItem(BaseModel):
    product_id: int = Field(..., alias="productId", gt=0, description="ID del producto")
    quantity: int = Field(..., gt=0, description="Cantidad a transferir")

    class Config:
        populate_by_name = True


class TransferCreate(BaseModel):
    warehouse_origin_id: int = Field(..., alias="warehouseOriginId", description="ID del depósito origen")
    warehouse_destination_id: int = Field(..., alias="warehouseDestinationId", description="ID del depósito destino")
    cart: List[CartItem] = Field(..., min_length=1, description="Productos y cantidades a transferir")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "warehouseOriginId": 1,
                "warehouseDestinationId": 2,
                "cart": [
                    {"productId": 7, "quantity": 12}
                ]
            }
        }


class TransferHeader(BaseModel):
    id: int
    warehouse_origin_id: int
    warehouse_destination_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LineProduct(BaseModel):
    id: int
    code: str
    barcode: str
    name: str
    description: Optional[str] = None
    category: Optional[CategoryInfo] = None
    unit: Optional[UnitInfo] = None

    class Config:
        from_attributes = True


class TransferLineDetail(BaseModel):
    id: int
    product_id: int
    quantity: int
    product: Optional[LineProduct] = None

    class Config:
        from_attributes = True


class TransferDetail(TransferHeader):
    user: Optional[UserInfo] = None
    warehouse_origin: Optional[WarehouseInfo] = None
    warehouse_destination: Optional[WarehouseInfo] = None
    lines: List[TransferLineDetail] = []


class TransferCreateResponse(BaseResponse):
    transfer: TransferHeader


class TransferResponse(BaseResponse):
    transfer: TransferDetail


class TransferListResponse(BaseResponse):
    transfers: List[TransferDetail]
    total: int
