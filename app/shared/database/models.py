# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text,
    Numeric, ForeignKey, UniqueConstraint, CheckConstraint,
    func
)
from sqlalchemy.orm import relationship

from app.config.database import Base


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# USUARIOS Y ROLES
# =====================================================

class Role(Base):
    """Rol de acceso (ADMIN, USER)"""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255))

    users = relationship("User", back_populates="role")


class User(Base, TimestampMixin):
    """Modelo de Usuario"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    role = relationship("Role", back_populates="users")
    transfers = relationship("Transfer", back_populates="user")

    @property
    def role_name(self) -> str:
        return self.role.name if self.role else ""


# =====================================================
# CATÁLOGO
# =====================================================

class Category(Base, TimestampMixin):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    products = relationship("Product", back_populates="category")


class Unit(Base, TimestampMixin):
    __tablename__ = "units"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, unique=True)
    name = Column(String(255), nullable=False)

    products = relationship("Product", back_populates="unit")


class Product(Base, TimestampMixin):
    """Producto del catálogo; el stock vive en StockEntry por depósito"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), nullable=False, unique=True, index=True)
    barcode = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default='ENABLED')
    allow_negative_stock = Column(Boolean, nullable=False, default=False)
    alert_low_stock = Column(Boolean, nullable=False, default=False)
    low_stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="products")
    unit = relationship("Unit", back_populates="products")
    stocks = relationship("StockEntry", back_populates="product", cascade="all, delete-orphan")
    prices = relationship("Price", back_populates="product", cascade="all, delete-orphan")


# =====================================================
# DEPÓSITOS Y STOCK
# =====================================================

class Warehouse(Base, TimestampMixin):
    """Depósito/Almacén"""
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True)
    description = Column(String(255), nullable=False)
    address = Column(Text)

    stocks = relationship("StockEntry", back_populates="warehouse", cascade="all, delete-orphan")


class StockEntry(Base, TimestampMixin):
    """Cantidad disponible de un producto en un depósito"""
    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    previous_quantity = Column(Integer, nullable=False, default=0)
    previous_changed_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    version = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint('product_id', 'warehouse_id', name='stocks_unique_per_warehouse'),
    )

    # UPDATE ... WHERE version = :old; evita updates perdidos
    __mapper_args__ = {"version_id_col": version}

    # Relationships
    product = relationship("Product", back_populates="stocks")
    warehouse = relationship("Warehouse", back_populates="stocks")


# =====================================================
# TRANSFERENCIAS
# =====================================================

class Transfer(Base, TimestampMixin):
    """Transferencia de productos entre depósitos"""
    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True, index=True)
    warehouse_origin_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    warehouse_destination_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Relationships
    user = relationship("User", back_populates="transfers")
    warehouse_origin = relationship("Warehouse", foreign_keys=[warehouse_origin_id])
    warehouse_destination = relationship("Warehouse", foreign_keys=[warehouse_destination_id])
    lines = relationship(
        "TransferLine",
        back_populates="transfer",
        cascade="all, delete-orphan",
        order_by="TransferLine.id"
    )


class TransferLine(Base):
    """Línea de transferencia (producto, cantidad)"""
    __tablename__ = "transfer_lines"

    id = Column(Integer, primary_key=True, index=True)
    transfer_id = Column(Integer, ForeignKey("transfers.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='transfer_lines_quantity_positive'),
    )

    transfer = relationship("Transfer", back_populates="lines")
    product = relationship("Product")


# =====================================================
# LISTAS DE PRECIO
# =====================================================

class PriceList(Base, TimestampMixin):
    __tablename__ = "pricelists"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True)
    description = Column(String(255), nullable=False)

    prices = relationship(
        "Price",
        back_populates="price_list",
        cascade="all, delete-orphan",
        order_by=lambda: [Price.created_at.desc(), Price.id.desc()]
    )


class Price(Base):
    """Precio de un producto en una lista; se guarda el histórico"""
    __tablename__ = "prices"

    id = Column(Integer, primary_key=True, index=True)
    price_list_id = Column(Integer, ForeignKey("pricelists.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    price_list = relationship("PriceList", back_populates="prices")
    product = relationship("Product", back_populates="prices")
