# app/modules/warehouses/service.py
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from app.shared.database.models import Warehouse
from app.shared.services.stock_ledger import StockLedger
from .repository import WarehousesRepository
from .schemas import (
    WarehouseCreate, WarehouseUpdate, WarehouseDetail,
    WarehouseResponse, WarehouseListResponse
)

logger = logging.getLogger(__name__)


def _to_detail(warehouse: Warehouse, with_stock: bool = True) -> WarehouseDetail:
    if with_stock:
        return WarehouseDetail.model_validate(warehouse)
    return WarehouseDetail(
        id=warehouse.id,
        code=warehouse.code,
        description=warehouse.description,
        address=warehouse.address,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at
    )


class WarehousesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = WarehousesRepository(db)
        self.ledger = StockLedger(db)

    async def get_warehouses(self, with_stock: bool = True) -> WarehouseListResponse:
        warehouses = self.repository.get_all(with_stock=with_stock)
        return WarehouseListResponse(
            success=True,
            message="Depósitos/Almacenes recuperados",
            warehouses=[_to_detail(w, with_stock) for w in warehouses]
        )

    async def get_warehouse(self, warehouse_id: int) -> WarehouseResponse:
        warehouse = self._get_or_404(warehouse_id)
        return WarehouseResponse(
            success=True,
            message="Depósito/Almacén recuperado",
            warehouse=_to_detail(warehouse)
        )

    async def create_warehouse(self, warehouse_data: WarehouseCreate) -> WarehouseResponse:
        """Crear depósito con stock en cero para cada producto existente"""
        if self.repository.get_by_code(warehouse_data.code):
            raise HTTPException(status_code=409, detail=f"Ya existe un depósito con código '{warehouse_data.code}'")

        try:
            warehouse = self.repository.create(warehouse_data.model_dump())
            seeded = self.ledger.seed_for_warehouse(warehouse.id)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error creando depósito")
            raise HTTPException(status_code=500, detail=f"[Warehouse - CREATE]: {str(e)}")

        logger.info(f"✅ Depósito #{warehouse.id} creado con {len(seeded)} filas de stock")
        return WarehouseResponse(
            success=True,
            message="Depósito/Almacén creado",
            warehouse=_to_detail(self._get_or_404(warehouse.id))
        )

    async def update_warehouse(self, warehouse_id: int, warehouse_data: WarehouseUpdate) -> WarehouseResponse:
        warehouse = self._get_or_404(warehouse_id)

        for field, value in warehouse_data.model_dump(exclude_unset=True).items():
            setattr(warehouse, field, value)

        self.db.commit()
        self.db.refresh(warehouse)

        return WarehouseResponse(
            success=True,
            message="Depósito/Almacén actualizado",
            warehouse=_to_detail(warehouse, with_stock=False)
        )

    async def delete_warehouse(self, warehouse_id: int) -> WarehouseResponse:
        """Eliminar depósito junto con sus filas de stock"""
        warehouse = self._get_or_404(warehouse_id)

        if self.repository.has_transfers(warehouse_id):
            raise HTTPException(
                status_code=409,
                detail=f"El depósito {warehouse_id} tiene transferencias registradas"
            )

        detail = _to_detail(warehouse, with_stock=False)
        self.db.delete(warehouse)
        self.db.commit()
        logger.info(f"🗑️ Depósito #{warehouse_id} eliminado")

        return WarehouseResponse(
            success=True,
            message="Depósito/Almacén eliminado",
            warehouse=detail
        )

    def _get_or_404(self, warehouse_id: int) -> Warehouse:
        warehouse = self.repository.get_by_id(warehouse_id)
        if not warehouse:
            raise HTTPException(status_code=404, detail=f"Depósito {warehouse_id} no encontrado")
        return warehouse
