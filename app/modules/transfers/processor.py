# app/modules/transfers/processor.py
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Sequence
import logging

from sqlalchemy.orm import Session

from app.shared.database.models import StockEntry, Transfer, TransferLine, Warehouse
from app.shared.exceptions import StockError
from app.shared.services.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int


class TransferProcessor:
    """
    Mueve stock entre dos depósitos para un carrito de varias líneas.

    Cabecera, líneas y los ajustes de stock de ambos depósitos se confirman en
    un único commit; ante cualquier error se hace rollback y no queda nada
    aplicado. Cada línea del carrito se empareja con la fila de stock de su
    producto (por id de producto, nunca por posición).
    """

    def __init__(self, db: Session, allow_self_transfer: bool = False):
        self.db = db
        self.ledger = StockLedger(db)
        self.allow_self_transfer = allow_self_transfer

    def process(
        self,
        warehouse_origin_id: int,
        warehouse_destination_id: int,
        user_id: int,
        cart: Sequence[CartLine]
    ) -> Transfer:
        """
        Registrar la transferencia y ajustar stock en origen (resta) y destino (suma).

        Raises:
            StockError: carrito inválido, depósito inexistente, producto sin fila
                de stock, stock insuficiente o modificación concurrente
        """
        self._validate(warehouse_origin_id, warehouse_destination_id, cart)

        try:
            self._ensure_warehouses(warehouse_origin_id, warehouse_destination_id)

            quantities = self._quantities_by_product(cart)
            entries = self._lock_stock(quantities, warehouse_origin_id, warehouse_destination_id)

            transfer = Transfer(
                warehouse_origin_id=warehouse_origin_id,
                warehouse_destination_id=warehouse_destination_id,
                user_id=user_id
            )
            self.db.add(transfer)
            self.db.flush()

            self.db.add_all([
                TransferLine(transfer_id=transfer.id, product_id=line.product_id, quantity=line.quantity)
                for line in cart
            ])
            self.db.flush()

            logger.info(
                f"📦 Transferencia #{transfer.id}: depósito {warehouse_origin_id} → "
                f"{warehouse_destination_id}, {len(cart)} líneas, usuario {user_id}"
            )

            # Origen igual a destino: el movimiento neto es cero y la fila no se toca
            if warehouse_origin_id != warehouse_destination_id:
                for product_id, quantity in quantities.items():
                    self.ledger.apply_delta(entries[warehouse_origin_id][product_id], -quantity)
                for product_id, quantity in quantities.items():
                    self.ledger.apply_delta(entries[warehouse_destination_id][product_id], quantity)

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning(
                f"❌ Transferencia {warehouse_origin_id} → {warehouse_destination_id} revertida"
            )
            raise

        self.db.refresh(transfer)
        logger.info(f"✅ Transferencia #{transfer.id} confirmada")
        return transfer

    def _validate(self, origin_id: int, destination_id: int, cart: Sequence[CartLine]) -> None:
        if not cart:
            raise StockError('EMPTY_CART')

        for line in cart:
            if line.quantity <= 0:
                raise StockError('INVALID_QUANTITY', product_id=line.product_id, requested=line.quantity)

        if origin_id == destination_id and not self.allow_self_transfer:
            raise StockError('SAME_WAREHOUSE', warehouse_id=origin_id)

    def _ensure_warehouses(self, *warehouse_ids: int) -> None:
        found = {
            warehouse_id for (warehouse_id,) in
            self.db.query(Warehouse.id).filter(Warehouse.id.in_(warehouse_ids))
        }
        for warehouse_id in warehouse_ids:
            if warehouse_id not in found:
                raise StockError('WAREHOUSE_NOT_FOUND', warehouse_id=warehouse_id)

    @staticmethod
    def _quantities_by_product(cart: Sequence[CartLine]) -> Dict[int, int]:
        """Cantidad total por producto, en orden ascendente de id"""
        totals: Dict[int, int] = {}
        for line in cart:
            totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity
        return OrderedDict(sorted(totals.items()))

    def _lock_stock(
        self,
        quantities: Dict[int, int],
        *warehouse_ids: int
    ) -> Dict[int, Dict[int, StockEntry]]:
        """Bloquear las filas de ambos depósitos, siempre en orden ascendente de depósito"""
        entries: Dict[int, Dict[int, StockEntry]] = {}
        for warehouse_id in sorted(set(warehouse_ids)):
            locked = self.ledger.lock_entries(quantities.keys(), warehouse_id)
            missing: List[int] = [product_id for product_id in quantities if product_id not in locked]
            if missing:
                raise StockError(
                    'STOCK_ENTRY_NOT_FOUND',
                    f"No existe stock del producto {missing[0]} en el depósito {warehouse_id}",
                    product_id=missing[0],
                    warehouse_id=warehouse_id
                )
            entries[warehouse_id] = locked
        return entries
