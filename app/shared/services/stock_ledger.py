from typing import Dict, Iterable, List, Optional
import logging

from sqlalchemy import and_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from app.shared.database.models import Product, StockEntry, Warehouse
from app.shared.exceptions import StockError

logger = logging.getLogger(__name__)


class StockLedger:
    """
    Acceso al stock por (producto, depósito).

    Todas las escrituras pasan por `set_quantity`, que guarda la cantidad
    anterior y la fecha del cambio anterior. La columna `version` hace que un
    UPDATE sobre una fila modificada por otra sesión falle en lugar de pisarla.

    El ledger nunca hace commit: el llamador define la transacción.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_entry(self, product_id: int, warehouse_id: int) -> Optional[StockEntry]:
        """Fila de stock del par, o None si no existe"""
        return self.db.query(StockEntry).filter(
            and_(
                StockEntry.product_id == product_id,
                StockEntry.warehouse_id == warehouse_id
            )
        ).first()

    def lock_entries(self, product_ids: Iterable[int], warehouse_id: int) -> Dict[int, StockEntry]:
        """
        Bloquear (SELECT FOR UPDATE) las filas de stock de los productos en el depósito.

        Las filas se leen de la más antigua a la más nueva y se conserva la
        primera encontrada por producto.

        Returns:
            Dict[product_id, StockEntry]: solo los productos con fila de stock
        """
        ids = sorted(set(product_ids))
        if not ids:
            return {}

        rows = (
            self.db.query(StockEntry)
            .options(joinedload(StockEntry.product))
            .filter(
                and_(
                    StockEntry.product_id.in_(ids),
                    StockEntry.warehouse_id == warehouse_id
                )
            )
            .order_by(StockEntry.created_at.asc(), StockEntry.id.asc())
            .with_for_update(of=StockEntry)
            .populate_existing()
            .all()
        )

        entries: Dict[int, StockEntry] = {}
        for row in rows:
            entries.setdefault(row.product_id, row)
        return entries

    def set_quantity(self, entry: StockEntry, new_quantity: int) -> StockEntry:
        """
        Sobrescribir la cantidad registrando el valor y la fecha anteriores.

        Raises:
            StockError: CONCURRENT_MODIFICATION si otra sesión cambió la fila
        """
        product_id, warehouse_id = entry.product_id, entry.warehouse_id
        previous_quantity = entry.quantity
        # updated_at es la fecha en que se fijó la cantidad que se reemplaza
        previous_changed_at = entry.updated_at

        entry.previous_quantity = previous_quantity
        entry.previous_changed_at = previous_changed_at
        entry.quantity = new_quantity

        try:
            self.db.flush()
        except StaleDataError as e:
            # La sesión queda inválida hasta el rollback: no leer atributos de entry
            logger.warning(
                f"⚠️ Stock modificado concurrentemente: producto {product_id} "
                f"depósito {warehouse_id}"
            )
            raise StockError(
                'CONCURRENT_MODIFICATION',
                product_id=product_id,
                warehouse_id=warehouse_id
            ) from e

        logger.info(
            f"   Stock producto {product_id} en depósito {warehouse_id}: "
            f"{previous_quantity} → {new_quantity}"
        )
        return entry

    def apply_delta(self, entry: StockEntry, delta: int) -> StockEntry:
        """Sumar `delta` a la fila; una resta no puede dejar stock negativo salvo que el producto lo permita"""
        new_quantity = entry.quantity + delta

        if delta < 0 and new_quantity < 0 and not entry.product.allow_negative_stock:
            raise StockError(
                'INSUFFICIENT_STOCK',
                product_id=entry.product_id,
                warehouse_id=entry.warehouse_id,
                available=entry.quantity,
                requested=-delta
            )

        return self.set_quantity(entry, new_quantity)

    # ========== ALTA DE FILAS EN CERO ==========

    def seed_for_warehouse(self, warehouse_id: int) -> List[StockEntry]:
        """Crear una fila en cero por cada producto existente para el depósito"""
        existing = {
            product_id for (product_id,) in
            self.db.query(StockEntry.product_id).filter(StockEntry.warehouse_id == warehouse_id)
        }
        entries = [
            StockEntry(product_id=product_id, warehouse_id=warehouse_id, quantity=0, previous_quantity=0)
            for (product_id,) in self.db.query(Product.id).order_by(Product.id)
            if product_id not in existing
        ]
        self.db.add_all(entries)
        self.db.flush()
        return entries

    def seed_for_product(self, product_id: int) -> List[StockEntry]:
        """Crear una fila en cero por cada depósito existente para el producto"""
        existing = {
            warehouse_id for (warehouse_id,) in
            self.db.query(StockEntry.warehouse_id).filter(StockEntry.product_id == product_id)
        }
        entries = [
            StockEntry(product_id=product_id, warehouse_id=warehouse_id, quantity=0, previous_quantity=0)
            for (warehouse_id,) in self.db.query(Warehouse.id).order_by(Warehouse.id)
            if warehouse_id not in existing
        ]
        self.db.add_all(entries)
        self.db.flush()
        return entries

    # ========== CONSULTAS ==========

    def list_entries(
        self,
        warehouse_id: Optional[int] = None,
        product_id: Optional[int] = None
    ) -> List[StockEntry]:
        query = self.db.query(StockEntry).options(
            joinedload(StockEntry.product),
            joinedload(StockEntry.warehouse)
        )
        if warehouse_id is not None:
            query = query.filter(StockEntry.warehouse_id == warehouse_id)
        if product_id is not None:
            query = query.filter(StockEntry.product_id == product_id)
        return query.order_by(StockEntry.warehouse_id, StockEntry.product_id).all()

    def low_stock_entries(self, warehouse_id: Optional[int] = None) -> List[StockEntry]:
        """Filas con alerta activa y cantidad en o por debajo del mínimo"""
        query = self.db.query(StockEntry).join(Product).options(
            joinedload(StockEntry.product),
            joinedload(StockEntry.warehouse)
        ).filter(
            and_(
                Product.alert_low_stock.is_(True),
                StockEntry.quantity <= Product.low_stock
            )
        )
        if warehouse_id is not None:
            query = query.filter(StockEntry.warehouse_id == warehouse_id)
        return query.order_by(StockEntry.warehouse_id, StockEntry.product_id).all()
