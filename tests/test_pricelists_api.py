from decimal import Decimal

import pytest


@pytest.fixture
def pricelist(client, admin_headers):
    response = client.post("/api/v1/pricelists/", json={"code": "MINORISTA", "description": "Precios al público"}, headers=admin_headers)
    assert response.status_code == 200
    return response.json()["pricelist"]


def _add_price(client, headers, pricelist, product, price):
    return client.post(
        f"/api/v1/pricelists/{pricelist['id']}/prices",
        json={"productId": product.id, "price": price},
        headers=headers
    )


def test_create_and_list_pricelists(client, admin_headers, user_headers, pricelist):
    duplicate = client.post("/api/v1/pricelists/", json={"code": "MINORISTA", "description": "Otra"}, headers=admin_headers)
    assert duplicate.status_code == 409

    listing = client.get("/api/v1/pricelists/", headers=user_headers).json()["pricelists"]
    assert [p["code"] for p in listing] == ["MINORISTA"]


def test_update_changes_pricelist_description(client, admin_headers, pricelist, warehouses):
    response = client.put(f"/api/v1/pricelists/{pricelist['id']}", json={"description": "Nueva"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["pricelist"]["description"] == "Nueva"
    assert response.json()["pricelist"]["code"] == "MINORISTA"


def test_write_requires_admin(client, user_headers):
    response = client.post("/api/v1/pricelists/", json={"code": "X", "description": "X"}, headers=user_headers)

    assert response.status_code == 403


def test_warehouse_view_uses_latest_price_and_stock(client, admin_headers, user_headers, pricelist, warehouses, make_product, set_stock):
    origin, _ = warehouses
    priced = make_product("A1")
    unpriced = make_product("A2")
    set_stock(priced, origin, 14)
    set_stock(unpriced, origin, 9)

    assert _add_price(client, admin_headers, pricelist, priced, "10.00").status_code == 200
    assert _add_price(client, admin_headers, pricelist, priced, "12.50").status_code == 200

    response = client.get(f"/api/v1/pricelists/{pricelist['id']}/warehouses/{origin.id}", headers=user_headers)

    assert response.status_code == 200
    body = response.json()["pricelist"]
    assert body["code"] == "MINORISTA"
    assert len(body["products"]) == 1
    product = body["products"][0]
    assert product["code"] == "A1"
    assert Decimal(str(product["price"])) == Decimal("12.50")
    assert product["stock"] == 14
    assert product["warehouse"]["code"] == "CENTRAL"
    assert product["category"]["name"] == "General"


def test_warehouse_product_view(client, admin_headers, user_headers, pricelist, warehouses, make_product, set_stock):
    origin, destination = warehouses
    priced = make_product("A1")
    unpriced = make_product("A2")
    set_stock(priced, destination, 4)
    _add_price(client, admin_headers, pricelist, priced, "7.25")

    found = client.get(
        f"/api/v1/pricelists/{pricelist['id']}/warehouses/{destination.id}/products/{priced.id}",
        headers=user_headers
    ).json()["pricelist"]
    missing = client.get(
        f"/api/v1/pricelists/{pricelist['id']}/warehouses/{destination.id}/products/{unpriced.id}",
        headers=user_headers
    ).json()["pricelist"]

    assert found["product"]["stock"] == 4
    assert found["product"]["warehouse"]["id"] == destination.id
    assert missing["product"] is None


def test_unknown_pricelist_or_warehouse(client, user_headers, pricelist, warehouses):
    origin, _ = warehouses

    assert client.get(f"/api/v1/pricelists/999/warehouses/{origin.id}", headers=user_headers).status_code == 404
    assert client.get(f"/api/v1/pricelists/{pricelist['id']}/warehouses/999", headers=user_headers).status_code == 404


def test_price_for_unknown_product(client, admin_headers, pricelist):
    response = client.post(
        f"/api/v1/pricelists/{pricelist['id']}/prices",
        json={"productId": 999, "price": "1.00"},
        headers=admin_headers
    )

    assert response.status_code == 404


def test_delete_pricelist(client, admin_headers, pricelist, make_product):
    _add_price(client, admin_headers, pricelist, make_product("A1"), "3.00")

    assert client.delete(f"/api/v1/pricelists/{pricelist['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/pricelists/{pricelist['id']}", headers=admin_headers).status_code == 404
