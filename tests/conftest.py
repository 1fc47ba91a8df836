import json
import os
from decimal import Decimal
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config overlay, initialize the domain and push its context. The
    activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from shared.config import reset_settings
    from shared.domain import init_domain

    reset_settings()
    storefront = init_domain()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from shared.database import drop_db, setup_db
    from shared.domain import storefront

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean.utils.globals import current_domain

    from notifications.channel import reset_channels
    from shared.logging import clear_context

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    reset_channels()
    clear_context()


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------
PASSWORD = "secret123"


@pytest.fixture
def email_outbox():
    from notifications.channel import get_email_channel

    return get_email_channel()


@pytest.fixture
def make_user():
    from protean.utils.globals import current_domain

    from identity.user.registration import RegisterUser
    from identity.user.user import User

    counter = {"n": 0}

    def _make(email=None, password=PASSWORD, role="user", **overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "name": f"Buyer {n}",
            "business_name": f"Business {n}",
            "email": email or f"buyer{n}@example.com",
            "password": password,
            "phone_number": f"98765{n:05d}",
            "address": "12 Relief Road, Surat",
            "role": role,
        }
        fields.update(overrides)
        user_id = current_domain.process(RegisterUser(**fields), asynchronous=False)
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture
def user(make_user):
    return make_user(email="buyer@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role="admin", name="Admin User")


@pytest.fixture
def category():
    from protean.utils.globals import current_domain

    from catalogue.category.management import CreateCategory, get_category

    category_id = current_domain.process(CreateCategory(name="Cargo", slug="cargo"), asynchronous=False)
    return get_category(category_id)


@pytest.fixture
def make_product(category):
    from protean.utils.globals import current_domain

    from catalogue.product.management import CreateProduct
    from catalogue.product.product import Product
    from shared.money import to_paise

    counter = {"n": 0}

    def _make(price=Decimal("500.00"), stock=10, **overrides):
        counter["n"] += 1
        fields = {
            "name": f"Product {counter['n']}",
            "sku": f"SKU-{counter['n']:04d}",
            "price_paise": to_paise(price),
            "stock": stock,
            "images": json.dumps(["https://cdn.example.com/p.jpg"]),
            "category_id": str(category.id),
        }
        fields.update(overrides)
        product_id = current_domain.process(CreateProduct(**fields), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture
def product(make_product):
    return make_product()


@pytest.fixture
def stock_of():
    """Current stock of a product, read fresh from the database."""
    from protean.utils.globals import current_domain

    from catalogue.product.product import Product

    def _stock(product):
        return current_domain.repository_for(Product).get(str(product.id)).stock

    return _stock


@pytest.fixture
def add_to_cart():
    from protean.utils.globals import current_domain

    from ordering.cart.items import AddToCart

    def _add(user, product, quantity=1, variants=None):
        command = AddToCart(
            user_id=str(user.id),
            product_id=str(product.id),
            quantity=quantity,
            variant_info=json.dumps(variants) if variants else None,
        )
        return current_domain.process(command, asynchronous=False)

    return _add


@pytest.fixture
def order_command():
    """Build a ``CreateOrder`` for ``user`` from ``(product, quantity)`` pairs."""
    from ordering.order.creation import CreateOrder

    def _command(user, lines, address="12 Relief Road, Surat", total_paise=None):
        items = [
            {"product_id": str(product.id), "quantity": quantity, "price_paise": product.price_paise}
            for product, quantity in lines
        ]
        if total_paise is None:
            total_paise = sum(item["price_paise"] * item["quantity"] for item in items)
        return CreateOrder(
            user_id=str(user.id),
            address=address,
            items=json.dumps(items),
            total_paise=total_paise,
            payment_method="cod",
        )

    return _command


@pytest.fixture(scope="session")
def app():
    from app import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def login():
    """Log ``client`` in and keep the session cookie on it."""

    def _login(client, email, password=PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def user_client(client, user, login):
    login(client, user.email)
    return client


@pytest.fixture
def admin_client(app, admin, login):
    from fastapi.testclient import TestClient

    admin_client = TestClient(app)
    login(admin_client, admin.email)
    return admin_client
