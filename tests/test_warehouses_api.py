from app.modules.transfers.processor import CartLine, TransferProcessor
from app.shared.database.models import StockEntry


def test_create_warehouse_seeds_stock_for_new_warehouse(client, db, admin_headers, warehouses, make_product):
    products = [make_product("A1"), make_product("A2")]

    response = client.post("/api/v1/warehouses/", json={
        "code": "NORTE",
        "description": "Depósito norte",
        "address": "Ruta 9 km 12"
    }, headers=admin_headers)

    assert response.status_code == 200
    warehouse = response.json()["warehouse"]
    assert warehouse["code"] == "NORTE"
    assert sorted(s["product_id"] for s in warehouse["stocks"]) == sorted(p.id for p in products)
    assert all(s["quantity"] == 0 for s in warehouse["stocks"])

    # Los depósitos existentes no reciben filas nuevas
    for existing in warehouses:
        assert db.query(StockEntry).filter(StockEntry.warehouse_id == existing.id).count() == len(products)


def test_create_warehouse_requires_admin(client, user_headers):
    response = client.post("/api/v1/warehouses/", json={"code": "X", "description": "X"}, headers=user_headers)

    assert response.status_code == 403


def test_create_warehouse_duplicate_code(client, admin_headers, warehouses):
    response = client.post("/api/v1/warehouses/", json={"code": "CENTRAL", "description": "Otro"}, headers=admin_headers)

    assert response.status_code == 409


def test_list_warehouses(client, user_headers, warehouses, make_product):
    make_product("A1")

    with_stock = client.get("/api/v1/warehouses/", headers=user_headers).json()["warehouses"]
    without_stock = client.get("/api/v1/warehouses/?nostock=true", headers=user_headers).json()["warehouses"]

    assert [w["code"] for w in with_stock] == ["CENTRAL", "SUCURSAL"]
    assert all(len(w["stocks"]) == 1 for w in with_stock)
    assert all(w["stocks"] is None for w in without_stock)


def test_update_warehouse(client, admin_headers, warehouses):
    origin, _ = warehouses

    response = client.put(f"/api/v1/warehouses/{origin.id}", json={"address": "Nueva dirección 1"}, headers=admin_headers)

    assert response.status_code == 200
    warehouse = response.json()["warehouse"]
    assert warehouse["address"] == "Nueva dirección 1"
    assert warehouse["description"] == "Depósito central"


def test_update_warehouse_clears_address(client, admin_headers, warehouses):
    origin, _ = warehouses

    response = client.put(f"/api/v1/warehouses/{origin.id}", json={"address": None}, headers=admin_headers)

    assert response.status_code == 200
    warehouse = response.json()["warehouse"]
    assert warehouse["address"] is None
    assert warehouse["description"] == "Depósito central"


def test_update_warehouse_rejects_null_description(client, admin_headers, warehouses):
    origin, _ = warehouses

    response = client.put(f"/api/v1/warehouses/{origin.id}", json={"description": None}, headers=admin_headers)

    assert response.status_code == 422


def test_delete_warehouse_removes_stock_rows(client, db, admin_headers, warehouses, make_product):
    _, destination = warehouses
    make_product("A1")

    response = client.delete(f"/api/v1/warehouses/{destination.id}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/api/v1/warehouses/{destination.id}", headers=admin_headers).status_code == 404
    assert db.query(StockEntry).filter(StockEntry.warehouse_id == destination.id).count() == 0


def test_delete_warehouse_with_transfers_is_rejected(client, db, admin_headers, admin_user, warehouses, make_product, set_stock):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 5)
    TransferProcessor(db).process(origin.id, destination.id, admin_user.id, [CartLine(product.id, 1)])

    response = client.delete(f"/api/v1/warehouses/{origin.id}", headers=admin_headers)

    assert response.status_code == 409
