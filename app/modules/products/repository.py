# app/modules/products/repository.py
from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional

from app.shared.database.models import Category, Product, TransferLine, Unit


class ProductsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Product]:
        return self.db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.unit)
        ).order_by(Product.id.asc()).all()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.unit)
        ).filter(Product.id == product_id).first()

    def get_by_code(self, code: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.code == code).first()

    def create(self, product_data: Dict[str, Any]) -> Product:
        """Crear producto sin confirmar (el servicio hace commit)"""
        product = Product(**product_data)
        self.db.add(product)
        self.db.flush()
        return product

    def is_referenced_by_transfers(self, product_id: int) -> bool:
        return self.db.query(TransferLine.id).filter(TransferLine.product_id == product_id).first() is not None

    # ========== CATEGORÍAS Y UNIDADES ==========

    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def create_category(self, name: str, description: Optional[str]) -> Category:
        category = Category(name=name, description=description)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def get_units(self) -> List[Unit]:
        return self.db.query(Unit).order_by(Unit.code).all()

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        return self.db.query(Unit).filter(Unit.id == unit_id).first()

    def get_unit_by_code(self, code: str) -> Optional[Unit]:
        return self.db.query(Unit).filter(Unit.code == code).first()

    def create_unit(self, code: str, name: str) -> Unit:
        unit = Unit(code=code, name=name)
        self.db.add(unit)
        self.db.commit()
        self.db.refresh(unit)
        return unit
