"""Cart item management: commands, handler and the cart read model."""

import json
from dataclasses import dataclass

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from ordering.cart.cart import Cart, CartItem, assert_owned_by
from ordering.cart.variants import VariantSelection
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    variant_info = Text()  # JSON: list of {name, value}


@storefront.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _cart_holding(item_id, user_id) -> Cart | None:
    """The cart holding ``item_id``, after checking ``user_id`` owns the line."""
    line = current_domain.repository_for(CartItem)._dao.query.filter(id=str(item_id)).all().first
    if line is None:
        return None
    assert_owned_by(line, user_id)
    return current_domain.repository_for(Cart).for_user(user_id)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id) or Cart.create(command.user_id)

        selection = VariantSelection.of(json.loads(command.variant_info) if command.variant_info else None)
        merging = cart.find_line(command.product_id, selection) is not None
        line = cart.add_item(command.product_id, command.quantity, selection)
        repo.add(cart)

        logger.info(
            "cart_item_added",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=line.quantity,
            merged=merging,
        )
        return str(line.id)

    @handle(UpdateCartQuantity)
    def update_quantity(self, command):
        cart = _cart_holding(command.cart_item_id, command.user_id)
        if cart is None or cart.item(command.cart_item_id) is None:
            raise ObjectNotFoundError({"cart_item_id": ["Cart item not found"]})

        cart.update_item_quantity(command.cart_item_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(command.cart_item_id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _cart_holding(command.cart_item_id, command.user_id)
        if cart is None or not cart.remove_item(command.cart_item_id):
            return

        current_domain.repository_for(Cart).add(cart)
        logger.info("cart_item_removed", user_id=str(command.user_id), cart_item_id=str(command.cart_item_id))

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return

        cart.clear()
        repo.add(cart)
        logger.info("cart_cleared", user_id=str(command.user_id))


@dataclass
class CartLine:
    item: CartItem
    product: Product


def get_cart(user_id: str) -> list[CartLine]:
    """Cart lines with their product; lines for deleted products are left out."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return []

    lines = cart.lines()
    products = current_domain.repository_for(Product).fetch_many(line.product_id for line in lines)
    return [CartLine(line, products[str(line.product_id)]) for line in lines if str(line.product_id) in products]


def get_cart_item(user_id: str, item_id: str) -> CartItem:
    cart = current_domain.repository_for(Cart).for_user(user_id)
    line = cart.item(item_id) if cart is not None else None
    if line is None:
        raise ObjectNotFoundError({"cart_item_id": ["Cart item not found"]})
    return line
