"""Order aggregate, its line items and the order status state machine.

State Machine:
    pending -> processing -> shipped -> delivered
    cancelled (from pending, processing, shipped)
    delivered and cancelled are terminal.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.cart.variants import VariantSelection
from shared.domain import storefront
from shared.money import from_paise


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Stock has left the warehouse from these states on
_SHIPPED_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_paise = Integer(required=True, min_value=0)
    variant_info = Text()  # JSON: list of {name, value}, sorted

    @property
    def price(self):
        return from_paise(self.price_paise)

    @property
    def variant_list(self) -> list[dict] | None:
        return json.loads(self.variant_info) if self.variant_info else None


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PENDING.value)
    total_paise = Integer(required=True, min_value=0)
    address = Text(required=True)
    payment_method = String(max_length=50)
    payment_intent_id = String(max_length=255)
    items = HasMany(OrderItem)
    created_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, address, total_paise, lines, payment_method=None):
        """Build a pending order from ``lines`` of ``{product_id, quantity, price_paise, variant_info}``."""
        if not address or not address.strip():
            raise ValidationError({"address": ["Delivery address is required"]})

        items = []
        for line in lines:
            variants = VariantSelection.of(line.get("variant_info")).as_list()
            items.append(
                OrderItem(
                    product_id=line["product_id"],
                    quantity=line["quantity"],
                    price_paise=line["price_paise"],
                    variant_info=json.dumps(variants) if variants else None,
                )
            )

        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total_paise=total_paise,
            address=address,
            payment_method=payment_method,
            created_at=datetime.now(UTC),
        )
        for item in items:
            order.add_items(item)
        return order

    @property
    def total(self):
        return from_paise(self.total_paise)

    @property
    def status_enum(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def has_shipped(self) -> bool:
        return self.status_enum in _SHIPPED_STATES

    def transition_to(self, target: str) -> OrderStatus:
        """Move to ``target`` and return the previous status."""
        try:
            target_status = OrderStatus(target)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status '{target}'. Expected one of: {allowed}"]}) from None

        current = self.status_enum
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

        self.status = target_status.value
        return current


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items

    def newest_first(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").all().items
