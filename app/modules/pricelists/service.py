# app/modules/pricelists/service.py
from fastapi import HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.shared.database.models import Price, PriceList, Product, StockEntry, Warehouse
from app.shared.schemas.common import CategoryInfo, UnitInfo, WarehouseInfo
from .repository import PriceListsRepository
from .schemas import (
    PriceListCreate, PriceListUpdate, PriceCreate,
    PriceListInfo, PriceDetail, PricedProduct,
    PriceListWarehouseDetail, PriceListWarehouseProductDetail,
    PriceListResponse, PriceListListResponse, PriceResponse,
    PriceListWarehouseResponse, PriceListWarehouseProductResponse
)

logger = logging.getLogger(__name__)


class PriceListsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = PriceListsRepository(db)

    async def get_pricelists(self) -> PriceListListResponse:
        pricelists = self.repository.get_all()
        return PriceListListResponse(
            success=True,
            message="Listas de precio recuperadas",
            pricelists=[PriceListInfo.model_validate(p) for p in pricelists]
        )

    async def get_pricelist(self, price_list_id: int) -> PriceListResponse:
        return PriceListResponse(
            success=True,
            message="Lista de precio recuperada",
            pricelist=PriceListInfo.model_validate(self._get_or_404(price_list_id))
        )

    async def create_pricelist(self, data: PriceListCreate) -> PriceListResponse:
        if self.repository.get_by_code(data.code):
            raise HTTPException(status_code=409, detail=f"Ya existe una lista de precio con código '{data.code}'")

        try:
            price_list = self.repository.create(data.code, data.description)
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error creando lista de precio")
            raise HTTPException(status_code=500, detail=f"[PriceLists - CREATE]: {str(e)}")

        logger.info(f"✅ Lista de precio #{price_list.id} creada")
        return PriceListResponse(
            success=True,
            message="Lista de precio creada",
            pricelist=PriceListInfo.model_validate(price_list)
        )

    async def update_pricelist(self, price_list_id: int, data: PriceListUpdate) -> PriceListResponse:
        price_list = self._get_or_404(price_list_id)
        price_list.description = data.description
        self.db.commit()
        self.db.refresh(price_list)

        return PriceListResponse(
            success=True,
            message="Lista de precio actualizada",
            pricelist=PriceListInfo.model_validate(price_list)
        )

    async def delete_pricelist(self, price_list_id: int) -> PriceListResponse:
        price_list = self._get_or_404(price_list_id)
        info = PriceListInfo.model_validate(price_list)

        self.db.delete(price_list)
        self.db.commit()
        logger.info(f"🗑️ Lista de precio #{price_list_id} eliminada")

        return PriceListResponse(
            success=True,
            message="Lista de precio eliminada",
            pricelist=info
        )

    async def add_price(self, price_list_id: int, data: PriceCreate) -> PriceResponse:
        """Registrar un nuevo precio; los anteriores quedan como histórico"""
        self._get_or_404(price_list_id)
        if not self.db.query(Product.id).filter(Product.id == data.product_id).first():
            raise HTTPException(status_code=404, detail=f"Producto {data.product_id} no encontrado")

        price = self.repository.add_price(price_list_id, data.product_id, data.price)
        logger.info(f"💲 Precio {price.price} para producto {data.product_id} en lista #{price_list_id}")

        return PriceResponse(
            success=True,
            message="Precio registrado",
            price=PriceDetail.model_validate(price)
        )

    async def get_for_warehouse(self, price_list_id: int, warehouse_id: int) -> PriceListWarehouseResponse:
        """Lista de precio con los productos que tienen stock en el depósito"""
        price_list = self._get_or_404(price_list_id)
        self._ensure_warehouse(warehouse_id)

        products = self._priced_products(price_list_id, warehouse_id)
        detail = PriceListWarehouseDetail(
            **PriceListInfo.model_validate(price_list).model_dump(),
            products=products
        )

        return PriceListWarehouseResponse(
            success=True,
            message="Lista de precio recuperada",
            pricelist=detail
        )

    async def get_for_warehouse_and_product(
        self,
        price_list_id: int,
        warehouse_id: int,
        product_id: int
    ) -> PriceListWarehouseProductResponse:
        price_list = self._get_or_404(price_list_id)
        self._ensure_warehouse(warehouse_id)

        products = self._priced_products(price_list_id, warehouse_id, product_id=product_id)
        detail = PriceListWarehouseProductDetail(
            **PriceListInfo.model_validate(price_list).model_dump(),
            product=products[0] if products else None
        )

        return PriceListWarehouseProductResponse(
            success=True,
            message="Lista de precio recuperada",
            pricelist=detail
        )

    def _priced_products(
        self,
        price_list_id: int,
        warehouse_id: int,
        product_id: Optional[int] = None
    ) -> List[PricedProduct]:
        """Cruzar el último precio de cada producto con su fila de stock en el depósito"""
        latest = self.repository.latest_prices(price_list_id, product_id=product_id)
        stocks = self.repository.stocks_in_warehouse(warehouse_id, product_id=product_id)

        return [
            _priced_product(latest[entry.product_id], entry)
            for entry in stocks
            if entry.product_id in latest
        ]

    def _ensure_warehouse(self, warehouse_id: int) -> None:
        if not self.db.query(Warehouse.id).filter(Warehouse.id == warehouse_id).first():
            raise HTTPException(status_code=404, detail=f"Depósito {warehouse_id} no encontrado")

    def _get_or_404(self, price_list_id: int) -> PriceList:
        price_list = self.repository.get_by_id(price_list_id)
        if not price_list:
            raise HTTPException(status_code=404, detail=f"Lista de precio {price_list_id} no encontrada")
        return price_list


def _priced_product(price: Price, entry: StockEntry) -> PricedProduct:
    product = price.product
    return PricedProduct(
        id=product.id,
        code=product.code,
        barcode=product.barcode,
        name=product.name,
        description=product.description,
        status=product.status,
        allow_negative_stock=product.allow_negative_stock,
        price=price.price,
        stock=entry.quantity,
        category=CategoryInfo.model_validate(product.category) if product.category else None,
        unit=UnitInfo.model_validate(product.unit) if product.unit else None,
        warehouse=WarehouseInfo.model_validate(entry.warehouse)
    )
