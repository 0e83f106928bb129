from app.shared.database.models import Transfer
from app.shared.services.stock_ledger import StockLedger


def _payload(origin, destination, *items):
    return {
        "warehouseOriginId": origin.id,
        "warehouseDestinationId": destination.id,
        "cart": [{"productId": p.id, "quantity": q} for p, q in items]
    }


def test_create_transfer(client, user_headers, regular_user, warehouses, make_product, set_stock, quantity_of):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 50)
    set_stock(product, destination, 10)

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination, (product, 12)), headers=user_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["transfer"]["warehouse_origin_id"] == origin.id
    assert body["transfer"]["warehouse_destination_id"] == destination.id
    assert body["transfer"]["user_id"] == regular_user.id
    assert quantity_of(product, origin) == 38
    assert quantity_of(product, destination) == 22


def test_create_transfer_accepts_snake_case(client, user_headers, warehouses, make_product, set_stock, quantity_of):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 5)

    response = client.post("/api/v1/transfers/", json={
        "warehouse_origin_id": origin.id,
        "warehouse_destination_id": destination.id,
        "cart": [{"product_id": product.id, "quantity": 5}]
    }, headers=user_headers)

    assert response.status_code == 200
    assert quantity_of(product, destination) == 5


def test_create_transfer_requires_token(client, warehouses, make_product):
    origin, destination = warehouses
    product = make_product("A1")

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination, (product, 1)))

    assert response.status_code == 401


def test_insufficient_stock_returns_409(client, db, user_headers, warehouses, make_product, set_stock, quantity_of):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 3)

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination, (product, 5)), headers=user_headers)

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "INSUFFICIENT_STOCK"
    assert body["details"]["available"] == 3
    assert quantity_of(product, origin) == 3
    assert db.query(Transfer).count() == 0


def test_same_warehouse_returns_400(client, user_headers, warehouses, make_product):
    origin, _ = warehouses
    product = make_product("A1")

    response = client.post("/api/v1/transfers/", json=_payload(origin, origin, (product, 1)), headers=user_headers)

    assert response.status_code == 400
    assert response.json()["error_code"] == "SAME_WAREHOUSE"


def test_unknown_product_returns_404(client, user_headers, warehouses):
    origin, destination = warehouses

    response = client.post("/api/v1/transfers/", json={
        "warehouseOriginId": origin.id,
        "warehouseDestinationId": destination.id,
        "cart": [{"productId": 4242, "quantity": 1}]
    }, headers=user_headers)

    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "STOCK_ENTRY_NOT_FOUND"
    assert body["details"]["product_id"] == 4242


def test_empty_cart_is_a_validation_error(client, user_headers, warehouses):
    origin, destination = warehouses

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination), headers=user_headers)

    assert response.status_code == 422


def test_list_and_get_transfers(client, user_headers, regular_user, warehouses, make_product, set_stock):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 50)
    created = client.post(
        "/api/v1/transfers/", json=_payload(origin, destination, (product, 12)), headers=user_headers
    ).json()["transfer"]

    listing = client.get("/api/v1/transfers/", headers=user_headers)
    assert listing.status_code == 200
    assert listing.json()["total"] == 1

    response = client.get(f"/api/v1/transfers/{created['id']}", headers=user_headers)
    assert response.status_code == 200
    transfer = response.json()["transfer"]
    assert transfer["user"]["email"] == regular_user.email
    assert "password_hash" not in transfer["user"]
    assert transfer["warehouse_origin"]["code"] == "CENTRAL"
    assert transfer["warehouse_destination"]["code"] == "SUCURSAL"
    assert [(l["product"]["code"], l["quantity"]) for l in transfer["lines"]] == [("A1", 12)]


def test_get_missing_transfer(client, user_headers):
    response = client.get("/api/v1/transfers/999", headers=user_headers)

    assert response.status_code == 404


def test_concurrent_change_returns_409(client, db, user_headers, warehouses, make_product, set_stock, quantity_of, change_after_lock):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 50)
    change_after_lock(product, origin, 45)

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination, (product, 12)), headers=user_headers)

    assert response.status_code == 409
    body = response.json()
    assert body["error_code"] == "CONCURRENT_MODIFICATION"
    assert body["details"] == {"product_id": product.id, "warehouse_id": origin.id}
    assert db.query(Transfer).count() == 0
    assert quantity_of(product, origin) == 45
    assert quantity_of(product, destination) == 0


def test_unexpected_error_returns_500(client, db, monkeypatch, user_headers, warehouses, make_product, set_stock, quantity_of):
    origin, destination = warehouses
    product = make_product("A1")
    set_stock(product, origin, 50)

    def broken_apply_delta(self, entry, delta):
        raise RuntimeError("disco lleno")

    monkeypatch.setattr(StockLedger, "apply_delta", broken_apply_delta)

    response = client.post("/api/v1/transfers/", json=_payload(origin, destination, (product, 12)), headers=user_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "[Transfers - CREATE]: disco lleno"
    assert db.query(Transfer).count() == 0
    assert quantity_of(product, origin) == 50
