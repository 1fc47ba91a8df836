"""Integration tests for application wiring: health, errors, request ids."""

from fastapi.testclient import TestClient

import app as app_module
import ordering.order.creation as creation
from app import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "test", "domain": "storefront"}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"x-request-id": "abc123"})
    assert response.headers["x-request-id"] == "abc123"


def test_request_id_generated(client):
    assert client.get("/health").headers["x-request-id"]


def test_body_validation_errors_are_400_with_field_map(client):
    response = client.post("/api/auth/login", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert "password" in response.json()["errors"]


def test_body_type_errors_are_400(user_client):
    assert user_client.put("/api/cart/some-line", json={"quantity": "lots"}).status_code == 400


def test_storefront_errors_render_message(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"message": "Login required.", "errors": {"session": ["Login required."]}}


def test_missing_aggregate_is_404(client):
    response = client.get("/api/products/no-such-product")
    assert response.status_code == 404
    assert response.json()["message"]


class _LogRecorder:
    def __init__(self):
        self.events = []

    def info(self, event, **fields):
        self.events.append((event, fields))

    error = warning = info

    def named(self, event):
        return [fields for name, fields in self.events if name == event]


class TestUnexpectedErrors:
    def _raise(self, monkeypatch):
        def broken(product_id, quantity):
            raise RuntimeError("stock ledger offline")

        monkeypatch.setattr(creation, "reserve_stock", broken)

    def _order(self, client, product):
        payload = {
            "items": [{"productId": str(product.id), "quantity": 1, "price": "500.00"}],
            "address": "12 Relief Road, Surat",
            "total": "500.00",
        }
        return client.post("/api/orders", json=payload)

    def test_become_500_json(self, app, user, login, product, monkeypatch):
        self._raise(monkeypatch)
        client = TestClient(app, raise_server_exceptions=False)
        login(client, user.email)

        response = self._order(client, product)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_are_logged_and_request_still_completes(self, app, user, login, product, monkeypatch):
        self._raise(monkeypatch)
        client = TestClient(app, raise_server_exceptions=False)
        login(client, user.email)

        recorder = _LogRecorder()
        monkeypatch.setattr(app_module, "logger", recorder)

        self._order(client, product)

        [failure] = recorder.named("request_failed")
        assert failure["error"] == "stock ledger offline"
        assert isinstance(failure["exc_info"], RuntimeError)
        assert recorder.named("request_completed")[-1]["status_code"] == 500


def test_startup_ensures_admin(monkeypatch, login):
    from shared.config import reset_settings

    monkeypatch.setenv("ADMIN_EMAIL", "boot@example.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "bootpass")
    reset_settings()
    try:
        with TestClient(create_app()) as client:
            data = login(client, "boot@example.com", password="bootpass")
        assert data["role"] == "admin"
    finally:
        monkeypatch.delenv("ADMIN_EMAIL")
        monkeypatch.delenv("ADMIN_PASSWORD")
        reset_settings()
