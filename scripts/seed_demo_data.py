"""
Script para crear las tablas y cargar datos de prueba
"""
from app.config.database import Base, SessionLocal, engine
from app.shared.database.models import Category, Product, Role, Unit, User, Warehouse
from app.shared.services.stock_ledger import StockLedger
from app.core.auth.service import AuthService
from app.core.auth.dependencies import ADMIN_ROLE, USER_ROLE


def seed_demo_data():
    """Crear roles, usuarios, depósitos y productos con stock inicial"""

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en la base de datos")
            return

        admin_role = Role(name=ADMIN_ROLE, description="Administrador")
        user_role = Role(name=USER_ROLE, description="Usuario operativo")
        db.add_all([admin_role, user_role])
        db.flush()

        test_users = [
            {
                "email": "admin@inventario.com",
                "password": "admin123",
                "name": "Ana",
                "lastname": "Administradora",
                "role": admin_role
            },
            {
                "email": "deposito@inventario.com",
                "password": "deposito123",
                "name": "Juan",
                "lastname": "Depósito",
                "role": user_role
            }
        ]

        for user_data in test_users:
            db.add(User(
                email=user_data["email"],
                password_hash=AuthService.get_password_hash(user_data["password"]),
                name=user_data["name"],
                lastname=user_data["lastname"],
                role_id=user_data["role"].id,
                is_active=True
            ))
            print(f"✅ Usuario creado: {user_data['email']} / {user_data['password']} ({user_data['role'].name})")

        central = Warehouse(code="CENTRAL", description="Depósito central", address="Av. Principal 100")
        branch = Warehouse(code="SUCURSAL", description="Sucursal norte", address="Calle Norte 250")
        db.add_all([central, branch])

        category = Category(name="General", description="Productos generales")
        unit = Unit(code="UN", name="Unidad")
        db.add_all([category, unit])
        db.flush()

        products = [
            Product(code="P-001", barcode="7790001000011", name="Yerba 1kg",
                    category_id=category.id, unit_id=unit.id, alert_low_stock=True, low_stock=10),
            Product(code="P-002", barcode="7790001000028", name="Azúcar 1kg",
                    category_id=category.id, unit_id=unit.id),
            Product(code="P-003", barcode="7790001000035", name="Aceite 900ml",
                    category_id=category.id, unit_id=unit.id, allow_negative_stock=True),
        ]
        db.add_all(products)
        db.flush()

        ledger = StockLedger(db)
        for warehouse in (central, branch):
            ledger.seed_for_warehouse(warehouse.id)

        # Stock inicial solo en el depósito central
        for product, quantity in zip(products, (50, 120, 30)):
            ledger.set_quantity(ledger.get_entry(product.id, central.id), quantity)

        db.commit()
        print(f"\n🎉 {len(test_users)} usuarios, 2 depósitos y {len(products)} productos creados")
        print("\n📋 Credenciales de prueba:")
        for user_data in test_users:
            print(f"   👤 {user_data['role'].name}: {user_data['email']} / {user_data['password']}")

    except Exception as e:
        db.rollback()
        print(f"❌ Error cargando datos de prueba: {e}")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
