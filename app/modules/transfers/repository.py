# app/modules/transfers/repository.py
from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List, Optional

from app.shared.database.models import Transfer, TransferLine, Product, User


class TransfersRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_details(self):
        return self.db.query(Transfer).options(
            joinedload(Transfer.user).joinedload(User.role),
            joinedload(Transfer.warehouse_origin),
            joinedload(Transfer.warehouse_destination),
            selectinload(Transfer.lines)
            .joinedload(TransferLine.product)
            .options(joinedload(Product.category), joinedload(Product.unit))
        )

    def get_all(self) -> List[Transfer]:
        """Todas las transferencias, más recientes primero"""
        return self._with_details().order_by(Transfer.created_at.desc(), Transfer.id.desc()).all()

    def get_by_id(self, transfer_id: int) -> Optional[Transfer]:
        return self._with_details().filter(Transfer.id == transfer_id).first()
