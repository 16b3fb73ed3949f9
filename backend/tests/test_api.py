from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from app.services import orders as orders_service

ADMIN_EMAIL = "admin@storetrack.com"
ADMIN_PASSWORD = "password123"

WIDGET = {"name": "Widget", "supply": 10, "price": 500, "category": "Electronics"}


def _create(client, headers, **overrides):
    res = client.post("/products", json={**WIDGET, **overrides}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["product"]


def test_health(client):
    assert client.get("/").json() == {"status": "ok"}


def test_requests_without_credentials_are_rejected(client):
    res = client.get("/products")
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized: No token provided."}

    res = client.get("/orders", headers={"Authorization": "Bearer nonsense"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid or expired token."}


def test_login_sets_cookie_that_authenticates(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert res.status_code == 200
    assert res.json()["token"]
    assert client.cookies.get("authToken") == res.json()["token"]
    assert client.get("/products").status_code == 200


def test_login_failures(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials."}

    res = client.post("/auth/login", json={"email": ADMIN_EMAIL})
    assert res.status_code == 400


def test_create_product_uses_camel_case(client, auth_headers):
    product = _create(client, auth_headers)

    assert product["name"] == "Widget"
    assert product["deletedAt"] is None
    assert "createdAt" in product


def test_create_product_lists_every_invalid_field(client, auth_headers):
    res = client.post(
        "/products",
        json={"name": "", "supply": -1, "price": 12.5, "category": "Toys"},
        headers=auth_headers,
    )

    assert res.status_code == 400
    errors = res.json()["errors"]
    assert len(errors) == 4
    for field in ("name", "supply", "price", "category"):
        assert any(e.startswith(f"{field} is invalid") for e in errors)


def test_list_products_filters(client, auth_headers):
    _create(client, auth_headers, name="Cheap Book", price=500, category="Books")
    _create(client, auth_headers, name="Good Book", price=1500, category="Books")
    _create(client, auth_headers, name="Lamp", price=1500, category="Home Goods")

    res = client.get(
        "/products",
        params={"minPrice": 1000, "maxPrice": 2000, "category": "Books"},
        headers=auth_headers,
    )
    assert [p["name"] for p in res.json()] == ["Good Book"]

    res = client.get("/products", params={"name": "BOOK"}, headers=auth_headers)
    assert len(res.json()) == 2

    res = client.get("/products", params={"category": "Toys"}, headers=auth_headers)
    assert res.status_code == 400


def test_product_lifecycle(client, auth_headers):
    product = _create(client, auth_headers)
    url = f"/products/{product['id']}"

    res = client.put(url, json={"price": 650}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["product"]["price"] == 650
    assert res.json()["product"]["supply"] == 10

    assert client.put(url, json={}, headers=auth_headers).status_code == 400

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url, headers=auth_headers).status_code == 404
    assert client.delete(url, headers=auth_headers).status_code == 404
    assert client.put(url, json={"price": 1}, headers=auth_headers).status_code == 404


def test_bad_ids(client, auth_headers):
    assert client.get("/products/abc", headers=auth_headers).status_code == 400
    assert client.get("/products/999", headers=auth_headers).status_code == 404
    assert client.get("/orders/abc", headers=auth_headers).status_code == 400
    assert client.get("/orders/999", headers=auth_headers).status_code == 404


def test_order_flow(client, auth_headers):
    product = _create(client, auth_headers)

    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 3}]},
        headers=auth_headers,
    )
    assert res.status_code == 201
    order = res.json()["order"]
    assert order["totalPrice"] == 1500
    assert order["status"] == "pending"
    assert order["items"][0]["priceAtPurchase"] == 500

    res = client.get(f"/orders/{order['id']}", headers=auth_headers)
    assert res.json()["items"][0]["product"]["supply"] == 7

    res = client.put(f"/orders/{order['id']}", json={"status": "cancelled"}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["order"]["status"] == "cancelled"
    assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["supply"] == 10

    res = client.put(f"/orders/{order['id']}", json={"status": "cancelled"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Only pending orders can be cancelled."}

    res = client.put(f"/orders/{order['id']}", json={"status": "delivered"}, headers=auth_headers)
    assert res.status_code == 400

    history = client.get(f"/products/{product['id']}/history", headers=auth_headers).json()
    assert [(h["type"], h["quantity"]) for h in history] == [
        ("arrival", 10),
        ("departure", 3),
        ("arrival", 3),
    ]
    assert history[0]["product"]["name"] == "Widget"

    assert client.delete(f"/orders/{order['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"/orders/{order['id']}", headers=auth_headers).status_code == 404
    assert client.get("/orders", headers=auth_headers).json() == []


def test_place_order_errors(client, auth_headers):
    product = _create(client, auth_headers, supply=2)

    res = client.post("/orders", json={"items": []}, headers=auth_headers)
    assert res.status_code == 400

    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 1}, {"productId": 777, "quantity": 1}]},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json() == {"error": "Product with ID 777 not found."}

    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 5}]},
        headers=auth_headers,
    )
    assert res.status_code == 409

    assert client.get("/orders", headers=auth_headers).json() == []
    assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["supply"] == 2


def test_history_endpoints(client, auth_headers):
    empty = _create(client, auth_headers, name="Empty", supply=0)
    _create(client, auth_headers, name="Stocked", supply=4)

    res = client.get(f"/products/{empty['id']}/history", headers=auth_headers)
    assert res.status_code == 404
    assert res.json() == {"error": "No history found for this product."}

    res = client.get("/products/history", headers=auth_headers)
    assert res.status_code == 200
    assert [(h["product"]["name"], h["quantity"]) for h in res.json()] == [("Stocked", 4)]


def test_store_failure_during_order_is_a_500(client, auth_headers, monkeypatch):
    product = _create(client, auth_headers)

    def broken(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(orders_service, "record_movement", broken)
    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 1}]},
        headers=auth_headers,
    )

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to place order."}
    assert client.get("/orders", headers=auth_headers).json() == []
    assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["supply"] == 10


def test_store_failure_while_reading_is_a_500(client, auth_headers, monkeypatch):
    def broken(db):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(orders_service, "list_orders", broken)
    res = client.get("/orders", headers=auth_headers)

    assert res.status_code == 500
    assert res.json() == {"error": "Internal Server Error."}


def test_order_detail_shows_soft_deleted_product(client, auth_headers):
    product = _create(client, auth_headers)
    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 2}]},
        headers=auth_headers,
    )
    order_id = res.json()["order"]["id"]
    assert client.delete(f"/products/{product['id']}", headers=auth_headers).status_code == 200

    res = client.get(f"/orders/{order_id}", headers=auth_headers)

    assert res.status_code == 200
    item_product = res.json()["items"][0]["product"]
    assert item_product["id"] == product["id"]
    assert item_product["deletedAt"] is not None
