"""
Fixtures de pytest para la API de inventario.

Cada test usa su propia base SQLite en tmp_path; `get_db` se reemplaza con
`app.dependency_overrides` para que los endpoints usen esa base.
"""
import os

# El engine de la app se construye al importar app.config.database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config.database import Base, get_db
from app.core.auth.service import AuthService
from app.main import app
from app.shared.database.models import Category, Product, Role, Unit, User, Warehouse
from app.shared.services.stock_ledger import StockLedger
from app.core.auth.dependencies import ADMIN_ROLE, USER_ROLE


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'inventario_test.db'}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==================== USUARIOS ====================

@pytest.fixture
def roles(db):
    admin_role = Role(name=ADMIN_ROLE, description="Administrador")
    user_role = Role(name=USER_ROLE, description="Usuario operativo")
    db.add_all([admin_role, user_role])
    db.commit()
    return {ADMIN_ROLE: admin_role, USER_ROLE: user_role}


def _create_user(db, role, email, password="secreto123"):
    user = User(
        name="Test",
        lastname=role.name.title(),
        email=email,
        password_hash=AuthService.get_password_hash(password),
        role_id=role.id,
        is_active=True
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def admin_user(db, roles):
    return _create_user(db, roles["ADMIN"], "admin@test.com")


@pytest.fixture
def regular_user(db, roles):
    return _create_user(db, roles["USER"], "usuario@test.com")


def auth_headers(user):
    token = AuthService.create_user_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return auth_headers(regular_user)


# ==================== CATÁLOGO Y STOCK ====================

@pytest.fixture
def catalog(db):
    category = Category(name="General", description="Productos generales")
    unit = Unit(code="UN", name="Unidad")
    db.add_all([category, unit])
    db.commit()
    return {"category": category, "unit": unit}


@pytest.fixture
def warehouses(db):
    origin = Warehouse(code="CENTRAL", description="Depósito central", address="Av. Principal 100")
    destination = Warehouse(code="SUCURSAL", description="Sucursal norte")
    db.add_all([origin, destination])
    db.commit()
    return origin, destination


@pytest.fixture
def make_product(db, catalog):
    """Crear un producto con filas de stock en cero en cada depósito existente"""
    def _make(code, **kwargs):
        product = Product(
            code=code,
            barcode=f"779{code}",
            name=f"Producto {code}",
            category_id=catalog["category"].id,
            unit_id=catalog["unit"].id,
            **kwargs
        )
        db.add(product)
        db.flush()
        StockLedger(db).seed_for_product(product.id)
        db.commit()
        return product
    return _make


@pytest.fixture
def set_stock(db):
    def _set(product, warehouse, quantity):
        ledger = StockLedger(db)
        entry = ledger.get_entry(product.id, warehouse.id)
        ledger.set_quantity(entry, quantity)
        db.commit()
        return entry
    return _set


@pytest.fixture
def quantity_of(session_factory):
    """Leer la cantidad con una sesión nueva (lo confirmado en la base)"""
    def _quantity(product, warehouse):
        session = session_factory()
        try:
            return StockLedger(session).get_entry(product.id, warehouse.id).quantity
        finally:
            session.close()
    return _quantity


@pytest.fixture
def change_after_lock(monkeypatch, session_factory):
    """
    Hacer que otra sesión cambie una fila de stock justo después de que el
    procesador la leyó con lock_entries (en SQLite el FOR UPDATE no bloquea).
    """
    def _install(product, warehouse, quantity):
        product_id, warehouse_id = product.id, warehouse.id
        original = StockLedger.lock_entries
        changed = []

        def lock_then_change(self, product_ids, locked_warehouse_id):
            locked = original(self, product_ids, locked_warehouse_id)
            if locked_warehouse_id == warehouse_id and not changed:
                changed.append(locked_warehouse_id)
                other = session_factory()
                try:
                    ledger = StockLedger(other)
                    ledger.set_quantity(ledger.get_entry(product_id, warehouse_id), quantity)
                    other.commit()
                finally:
                    other.close()
            return locked

        monkeypatch.setattr(StockLedger, "lock_entries", lock_then_change)
    return _install
