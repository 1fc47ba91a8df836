"""Cart aggregate: one per user, holding the lines they intend to order.

A line is identified by product plus variant selection. Adding a product the
cart already holds with an equal selection merges into that line instead of
opening a second one.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer, Text

from ordering.cart.variants import VariantSelection
from shared.clock import as_utc
from shared.domain import storefront
from shared.errors import AuthorizationError


@storefront.entity(part_of="Cart")
class CartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    variant_info = Text()  # JSON: list of {name, value}, sorted
    variant_key = Text()
    added_at = DateTime()

    @property
    def selection(self) -> VariantSelection:
        return VariantSelection.from_key(self.variant_key)

    @property
    def variant_list(self) -> list[dict] | None:
        return json.loads(self.variant_info) if self.variant_info else None


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def find_line(self, product_id, selection: VariantSelection):
        return next(
            (i for i in self.items if str(i.product_id) == str(product_id) and i.selection == selection),
            None,
        )

    def add_item(self, product_id, quantity, selection: VariantSelection) -> CartItem:
        """Add ``quantity`` of a product, merging into an equal line when there is one."""
        now = datetime.now(UTC)
        existing = self.find_line(product_id, selection)

        if existing:
            existing.quantity += quantity
            line = existing
        else:
            variants = selection.as_list()
            line = CartItem(
                user_id=self.user_id,
                product_id=product_id,
                quantity=quantity,
                variant_info=json.dumps(variants) if variants else None,
                variant_key=selection.key or None,
                added_at=now,
            )
            self.add_items(line)

        self.updated_at = now
        return line

    def item(self, item_id) -> CartItem | None:
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def update_item_quantity(self, item_id, quantity) -> CartItem | None:
        line = self.item(item_id)
        if line is not None:
            line.quantity = quantity
            self.updated_at = datetime.now(UTC)
        return line

    def remove_item(self, item_id) -> bool:
        line = self.item(item_id)
        if line is None:
            return False
        self.remove_items(line)
        self.updated_at = datetime.now(UTC)
        return True

    def clear(self):
        for line in list(self.items):
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

    def lines(self) -> list[CartItem]:
        return sorted(self.items, key=lambda i: as_utc(i.added_at).timestamp() if i.added_at else 0.0)


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first


def assert_owned_by(item: CartItem, user_id) -> None:
    if str(item.user_id) != str(user_id):
        raise AuthorizationError("This cart item belongs to another user")
