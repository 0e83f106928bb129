# app/modules/pricelists/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_admin_user
from .service import PriceListsService
from .schemas import (
    PriceListCreate, PriceListUpdate, PriceCreate,
    PriceListResponse, PriceListListResponse, PriceResponse,
    PriceListWarehouseResponse, PriceListWarehouseProductResponse
)

router = APIRouter()


@router.get("/", response_model=PriceListListResponse)
async def get_pricelists(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Listas de precio, las modificadas más recientemente primero"""
    service = PriceListsService(db)
    return await service.get_pricelists()


@router.get("/{price_list_id}", response_model=PriceListResponse)
async def get_pricelist(
    price_list_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.get_pricelist(price_list_id)


@router.get("/{price_list_id}/warehouses/{warehouse_id}", response_model=PriceListWarehouseResponse)
async def get_pricelist_for_warehouse(
    price_list_id: int,
    warehouse_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Lista de precio para un depósito

    Incluye cada producto con precio que tenga fila de stock en el depósito,
    con su último precio, la cantidad y los datos del depósito.
    """
    service = PriceListsService(db)
    return await service.get_for_warehouse(price_list_id, warehouse_id)


@router.get(
    "/{price_list_id}/warehouses/{warehouse_id}/products/{product_id}",
    response_model=PriceListWarehouseProductResponse
)
async def get_pricelist_for_warehouse_and_product(
    price_list_id: int,
    warehouse_id: int,
    product_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.get_for_warehouse_and_product(price_list_id, warehouse_id, product_id)


@router.post("/", response_model=PriceListResponse)
async def create_pricelist(
    data: PriceListCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.create_pricelist(data)


@router.post("/{price_list_id}/prices", response_model=PriceResponse)
async def add_price(
    price_list_id: int,
    data: PriceCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.add_price(price_list_id, data)


@router.put("/{price_list_id}", response_model=PriceListResponse)
async def update_pricelist(
    price_list_id: int,
    data: PriceListUpdate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.update_pricelist(price_list_id, data)


@router.delete("/{price_list_id}", response_model=PriceListResponse)
async def delete_pricelist(
    price_list_id: int,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = PriceListsService(db)
    return await service.delete_pricelist(price_list_id)
