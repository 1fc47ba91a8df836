"""Order read queries."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from identity.user.user import User
from ordering.order.order import Order
from shared.errors import AuthorizationError


@dataclass
class OrderView:
    order: Order
    user: User | None = None


def _buyers(orders) -> dict[str, User]:
    user_ids = list({str(order.user_id) for order in orders})
    if not user_ids:
        return {}
    users = current_domain.repository_for(User)._dao.query.filter(id__in=user_ids).all().items
    return {str(user.id): user for user in users}


def list_orders(actor: User) -> list[OrderView]:
    """The actor's own orders, or every order with its buyer for an admin."""
    repo = current_domain.repository_for(Order)
    if not actor.is_admin:
        return [OrderView(order) for order in repo.for_user(actor.id)]

    orders = repo.newest_first()
    buyers = _buyers(orders)
    return [OrderView(order, buyers.get(str(order.user_id))) for order in orders]


def get_order_with_items(actor: User, order_id: str) -> OrderView:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(actor.id) and not actor.is_admin:
        raise AuthorizationError("You do not have access to this order")

    buyer = _buyers([order]).get(str(order.user_id)) if actor.is_admin else None
    return OrderView(order, buyer)
