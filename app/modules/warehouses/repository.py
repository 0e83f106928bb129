# app/modules/warehouses/repository.py
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from typing import Any, Dict, List, Optional

from app.shared.database.models import StockEntry, Transfer, Warehouse


class WarehousesRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, with_stock: bool = True) -> List[Warehouse]:
        query = self.db.query(Warehouse)
        if with_stock:
            query = query.options(selectinload(Warehouse.stocks).joinedload(StockEntry.product))
        return query.order_by(Warehouse.id.asc()).all()

    def get_by_id(self, warehouse_id: int, with_stock: bool = True) -> Optional[Warehouse]:
        query = self.db.query(Warehouse)
        if with_stock:
            query = query.options(selectinload(Warehouse.stocks).joinedload(StockEntry.product))
        return query.filter(Warehouse.id == warehouse_id).first()

    def get_by_code(self, code: str) -> Optional[Warehouse]:
        return self.db.query(Warehouse).filter(Warehouse.code == code).first()

    def create(self, warehouse_data: Dict[str, Any]) -> Warehouse:
        """Crear depósito sin confirmar (el servicio hace commit)"""
        warehouse = Warehouse(
            code=warehouse_data['code'],
            description=warehouse_data['description'],
            address=warehouse_data.get('address')
        )
        self.db.add(warehouse)
        self.db.flush()
        return warehouse

    def has_transfers(self, warehouse_id: int) -> bool:
        return self.db.query(Transfer.id).filter(
            or_(
                Transfer.warehouse_origin_id == warehouse_id,
                Transfer.warehouse_destination_id == warehouse_id
            )
        ).first() is not None
