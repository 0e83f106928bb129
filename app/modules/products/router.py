# app/modules/products/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_admin_user
from .service import ProductsService
from .schemas import (
    ProductCreate, ProductUpdate, ProductResponse, ProductListResponse,
    CategoryCreate, CategoryResponse, CategoryListResponse,
    UnitCreate, UnitResponse, UnitListResponse
)

router = APIRouter()


# ==================== CATEGORÍAS Y UNIDADES ====================

@router.get("/categories", response_model=CategoryListResponse)
async def get_categories(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_categories()


@router.post("/categories", response_model=CategoryResponse)
async def create_category(
    category_data: CategoryCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.create_category(category_data)


@router.get("/units", response_model=UnitListResponse)
async def get_units(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_units()


@router.post("/units", response_model=UnitResponse)
async def create_unit(
    unit_data: UnitCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.create_unit(unit_data)


# ==================== PRODUCTOS ====================

@router.get("/", response_model=ProductListResponse)
async def get_products(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_products()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_product(product_id)


@router.post("/", response_model=ProductResponse)
async def create_product(
    product_data: ProductCreate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Crear producto

    Se crea una fila de stock en cero en cada depósito existente.
    """
    service = ProductsService(db)
    return await service.create_product(product_data)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.update_product(product_id, product_data)


@router.delete("/{product_id}", response_model=ProductResponse)
async def delete_product(
    product_id: int,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.delete_product(product_id)
