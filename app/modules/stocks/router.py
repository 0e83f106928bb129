# app/modules/stocks/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from .service import StocksService
from .schemas import StockResponse, StockListResponse

router = APIRouter()


@router.get("/", response_model=StockListResponse)
async def get_stocks(
    warehouse_id: Optional[int] = Query(None, description="Filtrar por depósito"),
    product_id: Optional[int] = Query(None, description="Filtrar por producto"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Consultar stock por depósito y/o producto"""
    service = StocksService(db)
    return await service.get_stocks(warehouse_id=warehouse_id, product_id=product_id)


@router.get("/low", response_model=StockListResponse)
async def get_low_stock(
    warehouse_id: Optional[int] = Query(None, description="Filtrar por depósito"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Alertas de stock bajo"""
    service = StocksService(db)
    return await service.get_low_stock(warehouse_id=warehouse_id)


@router.get("/{product_id}/{warehouse_id}", response_model=StockResponse)
async def get_stock(
    product_id: int,
    warehouse_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Stock de un producto en un depósito"""
    service = StocksService(db)
    return await service.get_stock(product_id, warehouse_id)
