"""Order status updates (admin)."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.product.stock import release_stock
from ordering.order.order import Order, OrderStatus
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        shipped_before = order.has_shipped
        previous = order.transition_to(command.status)

        # Goods still in the warehouse go back on the shelf
        if order.status_enum is OrderStatus.CANCELLED and not shipped_before:
            for item in order.items:
                release_stock(item.product_id, item.quantity)

        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous=previous.value,
            status=order.status,
        )
        return order.status
