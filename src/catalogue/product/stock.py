"""Stock movements on products.

Both directions are a compare-and-set: read the current level, then update
the row only where ``stock`` still holds that value. Called inside a command
handler, the update joins the handler's unit of work, so a later failure
rolls it back with everything else. The floor is checked against the value
the update is conditioned on, so two buyers racing for the last units can
never drive stock below zero.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from shared.errors import ConflictError, StockInsufficientError
from shared.logging import get_logger

logger = get_logger(__name__)

MAX_ATTEMPTS = 5


def _current(repo, product_id) -> Product:
    product = repo.fetch(product_id)
    if product is None:
        raise ObjectNotFoundError({"product_id": [f"Product {product_id} not found"]})
    return product


def _compare_and_set(repo, product_id, expected, new_level) -> bool:
    matched = repo._dao.query.filter(id=str(product_id), stock=expected).update_all(stock=new_level)
    return bool(matched)


def reserve_stock(product_id: str, quantity: int) -> int:
    """Take ``quantity`` units of ``product_id`` out of stock; returns the new level."""
    repo = current_domain.repository_for(Product)

    for attempt in range(1, MAX_ATTEMPTS + 1):
        available = _current(repo, product_id).stock
        if available < quantity:
            raise StockInsufficientError(product_id, requested=quantity, available=available)
        if _compare_and_set(repo, product_id, available, available - quantity):
            return available - quantity
        logger.info("stock_reservation_retry", product_id=str(product_id), attempt=attempt)

    raise ConflictError({"stock": [f"Stock for product {product_id} is changing too fast, please retry"]})


def release_stock(product_id: str, quantity: int) -> int | None:
    """Put ``quantity`` units back; returns the new level, or ``None`` if the product is gone."""
    repo = current_domain.repository_for(Product)

    for _ in range(MAX_ATTEMPTS):
        product = repo.fetch(product_id)
        if product is None:
            logger.warning("restock_skipped_missing_product", product_id=str(product_id))
            return None
        if _compare_and_set(repo, product_id, product.stock, product.stock + quantity):
            return product.stock + quantity

    raise ConflictError({"stock": [f"Stock for product {product_id} is changing too fast, please retry"]})
