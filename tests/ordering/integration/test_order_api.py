"""Integration tests for the order endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

import ordering.order.creation as creation


def _order_payload(product, quantity=1, price="500.00"):
    return {
        "items": [{"productId": str(product.id), "quantity": quantity, "price": price}],
        "address": "12 Relief Road, Surat",
        "total": str(Decimal(price) * quantity),
        "paymentMethod": "cod",
    }


class TestCreateOrderEndpoint:
    def test_create_order(self, user_client, user, product, email_outbox):
        response = user_client.post("/api/orders", json=_order_payload(product, quantity=2))

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["userId"] == str(user.id)
        assert data["total"] == "1000.00"
        assert data["paymentIntentId"] is None
        assert email_outbox.confirmation_for(data["id"]).to == user.email

    def test_empty_items_is_400_and_creates_nothing(self, user_client, product):
        payload = {**_order_payload(product), "items": []}

        response = user_client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"] == {"items": ["Order must have at least one item"]}
        assert user_client.get("/api/orders").json() == []

    def test_insufficient_stock_is_409(self, user_client, make_product):
        product = make_product(stock=1)
        response = user_client.post("/api/orders", json=_order_payload(product, quantity=2))

        assert response.status_code == 409
        assert "Insufficient stock" in response.json()["message"]

    def test_unknown_product_is_404(self, user_client, product, stock_of):
        payload = _order_payload(product)
        payload["items"].append({"productId": "no-such-product", "quantity": 1, "price": "1.00"})

        assert user_client.post("/api/orders", json=payload).status_code == 404
        assert user_client.get("/api/orders").json() == []
        assert stock_of(product) == 10

    def test_unexpected_failure_is_500_json(self, app, user, login, product, stock_of, monkeypatch):
        def broken(product_id, quantity):
            raise RuntimeError("stock ledger offline")

        monkeypatch.setattr(creation, "reserve_stock", broken)
        client = TestClient(app, raise_server_exceptions=False)
        login(client, user.email)

        response = client.post("/api/orders", json=_order_payload(product))

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert client.get("/api/orders").json() == []
        assert stock_of(product) == 10


class TestCheckoutEndpoint:
    def test_checkout_from_cart(self, user_client, product):
        user_client.post("/api/cart", json={"productId": str(product.id), "quantity": 2})

        response = user_client.post("/api/orders/checkout", json={"address": "Navrangpura, Ahmedabad"})

        assert response.status_code == 201
        assert response.json()["total"] == "1180.00"
        assert user_client.get("/api/cart").json() == []

    def test_checkout_empty_cart(self, user_client):
        response = user_client.post("/api/orders/checkout", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Your cart is empty"


class TestOrderReads:
    def test_list_and_detail(self, user_client, product):
        order_id = user_client.post("/api/orders", json=_order_payload(product)).json()["id"]

        [listed] = user_client.get("/api/orders").json()
        assert listed["id"] == order_id
        assert listed["items"][0]["productId"] == str(product.id)
        assert listed["items"][0]["orderId"] == order_id

        detail = user_client.get(f"/api/orders/{order_id}").json()
        assert detail["items"][0]["price"] == "500.00"

    def test_other_users_order_is_403(self, app, user_client, make_user, login, product):
        order_id = user_client.post("/api/orders", json=_order_payload(product)).json()["id"]
        other_client = TestClient(app)
        login(other_client, make_user().email)

        assert other_client.get(f"/api/orders/{order_id}").status_code == 403

    def test_missing_order_is_404(self, user_client):
        assert user_client.get("/api/orders/no-such-order").status_code == 404

    def test_admin_sees_buyer(self, user_client, admin_client, user, product):
        user_client.post("/api/orders", json=_order_payload(product))

        [order] = admin_client.get("/api/orders").json()
        assert order["user"] == {"id": str(user.id), "name": user.name, "email": user.email}


class TestOrderStatusEndpoint:
    def test_admin_moves_order_forward(self, user_client, admin_client, product):
        order_id = user_client.post("/api/orders", json=_order_payload(product)).json()["id"]

        response = admin_client.put(f"/api/orders/{order_id}/status", json={"status": "processing"})

        assert response.status_code == 200
        assert response.json()["status"] == "processing"

    def test_illegal_transition_is_400(self, user_client, admin_client, product):
        order_id = user_client.post("/api/orders", json=_order_payload(product)).json()["id"]

        response = admin_client.put(f"/api/orders/{order_id}/status", json={"status": "delivered"})
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot transition from pending to delivered"

    def test_buyer_cannot_change_status(self, user_client, product):
        order_id = user_client.post("/api/orders", json=_order_payload(product)).json()["id"]
        assert user_client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}).status_code == 403
