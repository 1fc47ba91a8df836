from decimal import Decimal

import pytest
from protean.exceptions import ValidationError

from ordering.order.order import Order, OrderStatus

LINES = [{"product_id": "prod-1", "quantity": 2, "price_paise": 50000}]


def _order(status="pending"):
    order = Order.place(user_id="user-1", address="Relief Road, Ahmedabad", total_paise=100000, lines=LINES)
    order.status = status
    return order


class TestPlaceOrder:
    def test_starts_pending(self):
        order = Order.place(user_id="user-1", address="Somewhere", total_paise=1000, lines=LINES, payment_method="cod")
        assert order.status == "pending"
        assert order.payment_method == "cod"
        assert order.payment_intent_id is None

    def test_items_carry_the_submitted_price(self):
        order = _order()
        [item] = order.items
        assert item.quantity == 2
        assert item.price == Decimal("500.00")
        assert order.total == Decimal("1000.00")

    def test_variants_are_stored_canonically(self):
        lines = [
            {
                "product_id": "prod-1",
                "quantity": 1,
                "price_paise": 100,
                "variant_info": [{"name": "Size", "value": "M"}, {"name": "Color", "value": "Red"}],
            }
        ]
        order = Order.place(user_id="user-1", address="Somewhere", total_paise=100, lines=lines)
        assert order.items[0].variant_list == [{"name": "Color", "value": "Red"}, {"name": "Size", "value": "M"}]

    def test_address_required(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(user_id="user-1", address="  ", total_paise=1000, lines=LINES)
        assert "address" in exc.value.messages

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(user_id="user-1", address="Somewhere", total_paise=-1, lines=LINES)

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(
                user_id="user-1",
                address="Somewhere",
                total_paise=0,
                lines=[{"product_id": "prod-1", "quantity": 0, "price_paise": 100}],
            )


class TestTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            ("pending", "processing"),
            ("processing", "shipped"),
            ("shipped", "delivered"),
            ("pending", "cancelled"),
            ("processing", "cancelled"),
            ("shipped", "cancelled"),
        ],
    )
    def test_allowed(self, current, target):
        order = _order(current)
        previous = order.transition_to(target)

        assert previous is OrderStatus(current)
        assert order.status == target

    @pytest.mark.parametrize(
        "current,target",
        [
            ("pending", "shipped"),
            ("pending", "delivered"),
            ("shipped", "processing"),
            ("delivered", "cancelled"),
            ("cancelled", "pending"),
            ("pending", "pending"),
        ],
    )
    def test_rejected(self, current, target):
        order = _order(current)
        with pytest.raises(ValidationError) as exc:
            order.transition_to(target)

        assert exc.value.messages["status"] == [f"Cannot transition from {current} to {target}"]
        assert order.status == current

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc:
            _order().transition_to("lost")
        assert "Unknown status 'lost'" in exc.value.messages["status"][0]

    def test_has_shipped(self):
        assert not _order("processing").has_shipped
        assert _order("shipped").has_shipped
        assert _order("delivered").has_shipped
