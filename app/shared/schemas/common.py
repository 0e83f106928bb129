# app/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime


class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class WarehouseInfo(BaseModel):
    id: int
    code: str
    description: str
    address: Optional[str] = None

    class Config:
        from_attributes = True


class CategoryInfo(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UnitInfo(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True


class RoleInfo(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserInfo(BaseModel):
    """Usuario sin credenciales"""
    id: int
    name: str
    lastname: str
    email: str
    role_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    role: Optional[RoleInfo] = None

    class Config:
        from_attributes = True
