"""Checkout: price the user's cart on the server and commit it as an order."""

import json
from decimal import Decimal

from protean.utils.globals import current_domain

from identity.user.user import User
from ordering.cart.items import get_cart
from ordering.order.creation import CreateOrder, place_order
from ordering.order.order import Order
from shared.config import get_settings
from shared.errors import EmptyOrderError
from shared.logging import get_logger
from shared.money import quantize, to_paise

logger = get_logger(__name__)


def price_lines(lines, address, settings=None) -> dict[str, Decimal]:
    """Return subtotal, tax, shipping and total for ``(unit_price, quantity)`` lines."""
    settings = settings or get_settings()
    subtotal = quantize(sum((Decimal(price) * quantity for price, quantity in lines), Decimal("0")))
    tax = quantize(subtotal * settings.tax_rate)
    free = settings.free_shipping_city and settings.free_shipping_city.lower() in (address or "").lower()
    shipping = quantize(0 if free else settings.shipping_fee)
    return {
        "subtotal": subtotal,
        "tax": tax,
        "shipping": shipping,
        "total": subtotal + tax + shipping,
    }


def checkout(user_id: str, address: str | None = None, payment_method: str | None = None) -> Order:
    """Turn the user's cart into an order at current catalogue prices."""
    cart = get_cart(user_id)
    if not cart:
        raise EmptyOrderError("Your cart is empty")

    if not address:
        address = current_domain.repository_for(User).get(user_id).address

    pricing = price_lines([(line.product.price, line.item.quantity) for line in cart], address)
    logger.info("checkout_priced", user_id=str(user_id), **{k: str(v) for k, v in pricing.items()})

    items = [
        {
            "product_id": str(line.product.id),
            "quantity": line.item.quantity,
            "price_paise": line.product.price_paise,
            "variant_info": line.item.variant_list,
        }
        for line in cart
    ]
    return place_order(
        CreateOrder(
            user_id=user_id,
            address=address or "",
            items=json.dumps(items),
            total_paise=to_paise(pricing["total"]),
            payment_method=payment_method,
        )
    )
