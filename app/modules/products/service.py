# app/modules/products/service.py
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from app.shared.database.models import Product
from app.shared.schemas.common import CategoryInfo, UnitInfo
from app.shared.services.stock_ledger import StockLedger
from .repository import ProductsRepository
from .schemas import (
    ProductCreate, ProductUpdate, ProductDetail, ProductResponse, ProductListResponse,
    CategoryCreate, CategoryResponse, CategoryListResponse,
    UnitCreate, UnitResponse, UnitListResponse
)

logger = logging.getLogger(__name__)


class ProductsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductsRepository(db)
        self.ledger = StockLedger(db)

    async def get_products(self) -> ProductListResponse:
        products = self.repository.get_all()
        return ProductListResponse(
            success=True,
            message="Productos recuperados",
            products=[ProductDetail.model_validate(p) for p in products]
        )

    async def get_product(self, product_id: int) -> ProductResponse:
        return ProductResponse(
            success=True,
            message="Producto recuperado",
            product=ProductDetail.model_validate(self._get_or_404(product_id))
        )

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Crear producto con stock en cero en cada depósito existente"""
        if self.repository.get_by_code(product_data.code):
            raise HTTPException(status_code=409, detail=f"Ya existe un producto con código '{product_data.code}'")
        self._check_catalog_refs(product_data.category_id, product_data.unit_id)

        try:
            product = self.repository.create(product_data.model_dump())
            seeded = self.ledger.seed_for_product(product.id)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error creando producto")
            raise HTTPException(status_code=500, detail=f"[Products - CREATE]: {str(e)}")

        logger.info(f"✅ Producto #{product.id} creado con stock en {len(seeded)} depósitos")
        return ProductResponse(
            success=True,
            message="Producto creado",
            product=ProductDetail.model_validate(self._get_or_404(product.id))
        )

    async def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductResponse:
        product = self._get_or_404(product_id)
        changes = product_data.model_dump(exclude_unset=True)
        self._check_catalog_refs(changes.get('category_id'), changes.get('unit_id'))

        for field, value in changes.items():
            setattr(product, field, value)

        self.db.commit()

        return ProductResponse(
            success=True,
            message="Producto actualizado",
            product=ProductDetail.model_validate(self._get_or_404(product_id))
        )

    async def delete_product(self, product_id: int) -> ProductResponse:
        """Eliminar producto junto con su stock y precios"""
        product = self._get_or_404(product_id)

        if self.repository.is_referenced_by_transfers(product_id):
            raise HTTPException(
                status_code=409,
                detail=f"El producto {product_id} figura en transferencias registradas"
            )

        detail = ProductDetail.model_validate(product)
        self.db.delete(product)
        self.db.commit()
        logger.info(f"🗑️ Producto #{product_id} eliminado")

        return ProductResponse(success=True, message="Producto eliminado", product=detail)

    # ========== CATEGORÍAS Y UNIDADES ==========

    async def get_categories(self) -> CategoryListResponse:
        return CategoryListResponse(
            success=True,
            message="Categorías recuperadas",
            categories=[CategoryInfo.model_validate(c) for c in self.repository.get_categories()]
        )

    async def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        category = self.repository.create_category(category_data.name, category_data.description)
        return CategoryResponse(
            success=True,
            message="Categoría creada",
            category=CategoryInfo.model_validate(category)
        )

    async def get_units(self) -> UnitListResponse:
        return UnitListResponse(
            success=True,
            message="Unidades recuperadas",
            units=[UnitInfo.model_validate(u) for u in self.repository.get_units()]
        )

    async def create_unit(self, unit_data: UnitCreate) -> UnitResponse:
        if self.repository.get_unit_by_code(unit_data.code):
            raise HTTPException(status_code=409, detail=f"Ya existe una unidad con código '{unit_data.code}'")

        unit = self.repository.create_unit(unit_data.code, unit_data.name)
        return UnitResponse(success=True, message="Unidad creada", unit=UnitInfo.model_validate(unit))

    def _check_catalog_refs(self, category_id, unit_id) -> None:
        if category_id is not None and not self.repository.get_category(category_id):
            raise HTTPException(status_code=404, detail=f"Categoría {category_id} no encontrada")
        if unit_id is not None and not self.repository.get_unit(unit_id):
            raise HTTPException(status_code=404, detail=f"Unidad {unit_id} no encontrada")

    def _get_or_404(self, product_id: int) -> Product:
        product = self.repository.get_by_id(product_id)
        if not product:
            raise HTTPException(status_code=404, detail=f"Producto {product_id} no encontrado")
        return product
