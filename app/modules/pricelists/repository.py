# app/modules/pricelists/repository.py
from sqlalchemy.orm import Session, joinedload
from typing import Dict, List, Optional
from decimal import Decimal

from app.shared.database.models import Price, PriceList, Product, StockEntry


class PriceListsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[PriceList]:
        return self.db.query(PriceList).order_by(PriceList.updated_at.desc(), PriceList.id.desc()).all()

    def get_by_id(self, price_list_id: int) -> Optional[PriceList]:
        return self.db.query(PriceList).filter(PriceList.id == price_list_id).first()

    def get_by_code(self, code: str) -> Optional[PriceList]:
        return self.db.query(PriceList).filter(PriceList.code == code).first()

    def create(self, code: str, description: str) -> PriceList:
        price_list = PriceList(code=code, description=description)
        self.db.add(price_list)
        self.db.commit()
        self.db.refresh(price_list)
        return price_list

    def add_price(self, price_list_id: int, product_id: int, price: Decimal) -> Price:
        entry = Price(price_list_id=price_list_id, product_id=product_id, price=price)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def latest_prices(self, price_list_id: int, product_id: Optional[int] = None) -> Dict[int, Price]:
        """
        Último precio de cada producto en la lista.

        Los precios se guardan como histórico; gana el más reciente.
        """
        query = self.db.query(Price).options(
            joinedload(Price.product).joinedload(Product.category),
            joinedload(Price.product).joinedload(Product.unit)
        ).filter(Price.price_list_id == price_list_id)

        if product_id is not None:
            query = query.filter(Price.product_id == product_id)

        latest: Dict[int, Price] = {}
        for price in query.order_by(Price.created_at.desc(), Price.id.desc()):
            latest.setdefault(price.product_id, price)
        return latest

    def stocks_in_warehouse(self, warehouse_id: int, product_id: Optional[int] = None) -> List[StockEntry]:
        query = self.db.query(StockEntry).options(
            joinedload(StockEntry.warehouse)
        ).filter(StockEntry.warehouse_id == warehouse_id)

        if product_id is not None:
            query = query.filter(StockEntry.product_id == product_id)

        return query.order_by(StockEntry.product_id.asc()).all()
