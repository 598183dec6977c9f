from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_embedding_client
from storefront.data.database import get_db
from storefront.main import create_app
from storefront.services.identity_service import create_access_token
from storefront.services.session_service import SessionRegistry

SHIPPING = {
    "email": "jan@example.com",
    "first_name": "Jan",
    "last_name": "Kowalski",
    "phone": "123456789",
    "address": "ul. Prosta 1",
    "city": "Warszawa",
    "state": "Mazowieckie",
    "zip_code": "00-001",
}
PAYMENT = {"card_number": "4111111111111111", "card_name": "Jan Kowalski", "expiry_date": "12/30", "cvv": "123"}


@pytest.fixture
def client(db, fake_embeddings, notifier):
    app = create_app(SessionRegistry(notifier=notifier, debounce_seconds=0))

    def override_db():
        yield db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_embedding_client] = lambda: fake_embeddings
    return TestClient(app)


@pytest.fixture
def customer(make_profile):
    make_profile("customer-1", role="customer", full_name="Jan Kowalski", address="ul. Prosta 1")
    return {"Authorization": f"Bearer {create_access_token('customer-1')}"}


@pytest.fixture
def seller(make_profile):
    make_profile("seller-1", role="seller", full_name="Sklep Jana")
    return {"Authorization": f"Bearer {create_access_token('seller-1')}"}


@pytest.fixture
def session_headers(client):
    resp = client.post("/sessions/")
    assert resp.status_code == 201
    return {"X-Session-Id": resp.json()["session_id"]}


def test_unknown_session_is_404(client):
    resp = client.get("/cart/", headers={"X-Session-Id": "nope"})
    assert resp.status_code == 404


def test_cart_add_merge_update_remove(client, session_headers, make_product):
    product = make_product(price=Decimal("10"), stock_quantity=5)

    client.post("/cart/items", json={"product_id": product.id, "quantity": 1}, headers=session_headers)
    resp = client.post("/cart/items", json={"product_id": product.id, "quantity": 2}, headers=session_headers)

    body = resp.json()
    assert resp.status_code == 200
    assert len(body["items"]) == 1
    assert body["items"][0]["quantity"] == 3
    assert body["items"][0]["persisted_product_id"] == product.id
    assert Decimal(body["total"]) == Decimal("30.00")
    assert body["is_open"] is True

    resp = client.patch(f"/cart/items/{product.id}", json={"quantity": 0}, headers=session_headers)
    assert resp.json()["items"] == []


def test_cart_rejects_quantity_beyond_stock(client, session_headers, make_product):
    product = make_product(stock_quantity=2)

    resp = client.post("/cart/items", json={"product_id": product.id, "quantity": 3}, headers=session_headers)
    assert resp.status_code == 400

    client.post("/cart/items", json={"product_id": product.id, "quantity": 2}, headers=session_headers)
    resp = client.patch(f"/cart/items/{product.id}", json={"quantity": 5}, headers=session_headers)
    assert resp.status_code == 400


def test_cart_rejects_unknown_product(client, session_headers):
    resp = client.post("/cart/items", json={"product_id": "missing", "quantity": 1}, headers=session_headers)
    assert resp.status_code == 404


def test_search_without_embeddings_is_503(client, make_product, fake_embeddings):
    make_product()
    fake_embeddings.vector = None

    resp = client.get("/products/", params={"q": "keyboard"})

    assert resp.status_code == 503


def test_products_listing_and_details(client, session_headers, make_product, fake_embeddings):
    kb = make_product(name="Keyboard", embedding=[1.0, 0.0], image_url=None)
    make_product(name="Sofa", category="Home", embedding=[0.0, 1.0])
    fake_embeddings.vector = [1.0, 0.0]

    found = client.get("/products/", params={"q": "keyboard"}, headers=session_headers).json()
    assert [p["name"] for p in found] == ["Keyboard"]

    home = client.get("/products/", params={"category": "Home"}).json()
    assert [p["name"] for p in home] == ["Sofa"]

    details = client.get(f"/products/{kb.id}").json()
    assert details["in_stock"] is True
    assert details["image"].startswith("https://via.placeholder.com")

    assert client.get("/products/categories").json() == ["Electronics", "Home"]


def test_full_checkout_flow(client, session_headers, customer, make_product, notifier):
    a = make_product(name="Monitor", price=Decimal("300"))
    b = make_product(name="Mouse", price=Decimal("100"))
    c = make_product(name="Pad", price=Decimal("200"))
    for p in (a, b, c):
        client.post("/cart/items", json={"product_id": p.id, "quantity": 1}, headers=session_headers)

    state = client.get("/checkout/", headers={**session_headers, **customer}).json()
    assert state["step"] == "shipping"
    assert state["shipping"]["first_name"] == "Jan"
    assert Decimal(state["summary"]["total"]) == Decimal("648.00")

    resp = client.post("/checkout/payment", json=PAYMENT, headers=session_headers)
    assert resp.status_code == 400

    assert client.post("/checkout/shipping", json=SHIPPING, headers=session_headers).json()["step"] == "payment"
    assert client.post("/checkout/payment", json=PAYMENT, headers=session_headers).json()["step"] == "review"

    resp = client.post("/checkout/place-order", headers=session_headers)
    assert resp.status_code == 401

    resp = client.post("/checkout/place-order", headers={**session_headers, **customer})
    assert resp.status_code == 201
    placed = resp.json()
    assert placed["line_count"] == 3

    assert client.get("/cart/", headers=session_headers).json()["items"] == []
    assert notifier.sent == [("customer-1", placed["order_id"])]

    history = client.get("/orders/mine", headers=customer).json()
    assert len(history) == 1
    assert history[0]["status"] == "pending"
    assert {line["product_name"] for line in history[0]["lines"]} == {"Monitor", "Mouse", "Pad"}


def test_shipping_validation_error_lists_fields(client, session_headers):
    resp = client.post("/checkout/shipping", json={**SHIPPING, "zip_code": ""}, headers=session_headers)

    assert resp.status_code == 400
    assert "zip_code" in resp.json()["detail"]["fields"]


def test_seller_routes_require_seller_role(client, customer):
    assert client.get("/seller/products").status_code == 401
    assert client.get("/seller/products", headers=customer).status_code == 403


def test_seller_inventory_and_orders(client, seller, customer, session_headers, make_product, fake_embeddings):
    fake_embeddings.vector = [0.5, 0.5]
    resp = client.post(
        "/seller/products",
        json={"name": "Mug", "description": "Big mug", "price": "25.00", "stock_quantity": 4},
        headers=seller,
    )
    assert resp.status_code == 201
    mug_id = resp.json()["id"]

    foreign = make_product(name="Plate", seller_id="seller-2")
    assert client.delete(f"/seller/products/{foreign.id}", headers=seller).status_code == 404

    assert [p["name"] for p in client.get("/seller/products", headers=seller).json()] == ["Mug"]

    client.post("/cart/items", json={"product_id": mug_id, "quantity": 2}, headers=session_headers)
    client.post("/checkout/shipping", json=SHIPPING, headers=session_headers)
    client.post("/checkout/payment", json=PAYMENT, headers=session_headers)
    order_id = client.post("/checkout/place-order", headers={**session_headers, **customer}).json()["order_id"]

    rows = client.get("/seller/orders", headers=seller).json()
    assert len(rows) == 1
    assert rows[0]["customer_name"] == "Jan Kowalski"
    assert rows[0]["quantity"] == 2

    resp = client.patch(f"/seller/orders/{order_id}", json={"delivery_status": "shipped"}, headers=seller)
    assert resp.status_code == 200
    assert resp.json()[0]["delivery_status"] == "shipped"

    resp = client.patch(f"/seller/orders/{order_id}", json={"delivery_status": "lost"}, headers=seller)
    assert resp.status_code == 422


def test_create_app_keeps_injected_empty_registry(notifier):
    registry = SessionRegistry(notifier=notifier, debounce_seconds=0)
    assert len(registry) == 0

    app = create_app(registry)

    assert app.state.sessions is registry
