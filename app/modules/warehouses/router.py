# app/modules/warehouses/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_admin_user
from .service import WarehousesService
from .schemas import WarehouseCreate, WarehouseUpdate, WarehouseResponse, WarehouseListResponse

router = APIRouter()


@router.get("/", response_model=WarehouseListResponse)
async def get_warehouses(
    nostock: bool = Query(False, description="Omitir el stock de cada depósito"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Listar depósitos ordenados por ID, con su stock salvo `nostock=true`"""
    service = WarehousesService(db)
    return await service.get_warehouses(with_stock=not nostock)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
async def get_warehouse(
    warehouse_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = WarehousesService(db)
    return await service.get_warehouse(warehouse_id)


@router.post("/", response_model=WarehouseResponse)
async def create_warehouse(
    warehouse_data: WarehouseCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Crear depósito

    Se crea una fila de stock en cero para cada producto existente.
    """
    service = WarehousesService(db)
    return await service.create_warehouse(warehouse_data)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
async def update_warehouse(
    warehouse_id: int,
    warehouse_data: WarehouseUpdate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Actualizar dirección y/o descripción"""
    service = WarehousesService(db)
    return await service.update_warehouse(warehouse_id, warehouse_data)


@router.delete("/{warehouse_id}", response_model=WarehouseResponse)
async def delete_warehouse(
    warehouse_id: int,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = WarehousesService(db)
    return await service.delete_warehouse(warehouse_id)
