"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json
import re
from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import given, parsers, then, when

from catalogue.product.product import Product
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart
from ordering.order.creation import CreateOrder
from ordering.order.order import Order
from shared.errors import StockInsufficientError

_ORDER_LINE = re.compile(r'(\d+) of "([^"]+)"')


def _variants(text):
    """``"Size=M, Color=Red"`` as a list of ``{name, value}`` pairs."""
    options = []
    for part in text.split(","):
        name, value = part.split("=")
        options.append({"name": name.strip(), "value": value.strip()})
    return options


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Products created by the scenario, by name."""
    return {}


@pytest.fixture()
def placed():
    return {"order_id": None}


@pytest.fixture()
def error():
    """Container for the error a When step ran into."""
    return {"exc": None}


def _add(buyer, product, qty, variant_info=None):
    command = AddToCart(user_id=str(buyer.id), product_id=str(product.id), quantity=qty, variant_info=variant_info)
    return current_domain.process(command, asynchronous=False)


def _order(buyer, products, order_lines):
    items = [
        {"product_id": str(products[name].id), "quantity": int(qty), "price_paise": products[name].price_paise}
        for qty, name in _ORDER_LINE.findall(order_lines)
    ]
    command = CreateOrder(
        user_id=str(buyer.id),
        address=buyer.address,
        items=json.dumps(items),
        total_paise=sum(item["price_paise"] * item["quantity"] for item in items),
        payment_method="cod",
    )
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered buyer", target_fixture="buyer")
def registered_buyer(make_user):
    return make_user()


@given(parsers.cfparse('a product "{name}" priced at {price} with {stock:d} in stock'))
def product_in_stock(make_product, products, name, price, stock):
    products[name] = make_product(price=Decimal(price), stock=stock, name=name)


@given(parsers.cfparse("the buyer has ordered {order_lines}"))
def buyer_has_ordered(buyer, products, placed, order_lines):
    placed["order_id"] = _order(buyer, products, order_lines)


# ---------------------------------------------------------------------------
# Cart steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the buyer adds {qty:d} of "{name}" without variants'))
@when(parsers.cfparse('the buyer adds {qty:d} of "{name}" without variants'))
def add_without_variants(buyer, products, qty, name):
    _add(buyer, products[name], qty)


@when(parsers.cfparse('the buyer adds {qty:d} of "{name}" with an empty variant list'))
def add_with_empty_variants(buyer, products, qty, name):
    _add(buyer, products[name], qty, variant_info="[]")


@when(parsers.cfparse('the buyer adds {qty:d} of "{name}" with variants "{variants}"'))
def add_with_variants(buyer, products, qty, name, variants, error):
    try:
        _add(buyer, products[name], qty, variant_info=json.dumps(_variants(variants)))
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Order steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("the buyer orders {order_lines}"))
def buyer_orders(buyer, products, placed, error, order_lines):
    try:
        placed["order_id"] = _order(buyer, products, order_lines)
    except (ValidationError, InvalidOperationError) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(buyer, count):
    cart_has_lines(buyer, count)


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(buyer, count):
    cart = current_domain.repository_for(Cart).for_user(str(buyer.id))
    assert len(cart.items if cart else []) == count


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_has_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(str(products[name].id)).stock == stock


@then("the order is placed")
def order_is_placed(placed, error):
    assert error["exc"] is None
    order = current_domain.repository_for(Order).get(placed["order_id"])
    assert order.status == "pending"


@then("the order is refused for insufficient stock")
def order_is_refused(error):
    assert isinstance(error["exc"], StockInsufficientError)


@then("no order exists")
def no_order_exists():
    assert current_domain.repository_for(Order).newest_first() == []
