"""Order creation: the committer that turns line items into an order.

The handler runs in a single unit of work: stock reservations, the order
with its items and the emptied cart are committed together, so a failure on
any line leaves no order, no stock change and an untouched cart.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.product.stock import reserve_stock
from identity.user.user import User
from notifications.channel import send_email
from notifications.templates.order_confirmation import OrderConfirmationTemplate
from ordering.cart.cart import Cart
from ordering.order.order import Order
from shared.domain import storefront
from shared.errors import EmptyOrderError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CreateOrder:
    user_id = Identifier(required=True)
    address = Text(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price_paise, variant_info}
    total_paise = Integer(required=True, min_value=0)
    payment_method = String(max_length=50)


@storefront.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        lines = json.loads(command.items) if isinstance(command.items, str) else command.items
        if not lines:
            raise EmptyOrderError()

        order = Order.place(
            user_id=command.user_id,
            address=command.address,
            total_paise=command.total_paise,
            lines=lines,
            payment_method=command.payment_method,
        )

        for item in order.items:
            reserve_stock(item.product_id, item.quantity)

        current_domain.repository_for(Order).add(order)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is not None:
            cart.clear()
            cart_repo.add(cart)

        logger.info(
            "order_created",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(lines),
            total=str(order.total),
        )
        return str(order.id)


def send_order_confirmation(order: Order) -> None:
    """Best-effort confirmation email; a failure is logged and never undoes the order."""
    buyer = current_domain.repository_for(User)._dao.query.filter(id=str(order.user_id)).all().first
    if buyer is None:
        return

    try:
        send_email(
            OrderConfirmationTemplate,
            to=buyer.email,
            context={
                "order_id": str(order.id),
                "total_amount": order.total,
                "item_count": len(order.items),
                "name": buyer.name,
            },
        )
    except Exception:
        logger.exception("order_confirmation_failed", order_id=str(order.id))


def place_order(command: CreateOrder) -> Order:
    """Commit ``command`` and confirm the order to the buyer once it is stored."""
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    send_order_confirmation(order)
    return order
