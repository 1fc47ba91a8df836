"""Watchlist management and queries."""

from dataclasses import dataclass

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from ordering.watchlist.watchlist import WatchlistItem
from shared.domain import storefront
from shared.errors import ConflictError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="WatchlistItem")
class AddToWatchlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="WatchlistItem")
class RemoveFromWatchlist:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command_handler(part_of=WatchlistItem)
class ManageWatchlistHandler:
    @handle(AddToWatchlist)
    def add_to_watchlist(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(WatchlistItem)
        if repo.find_entry(command.user_id, command.product_id) is not None:
            raise ConflictError({"product_id": ["Product already in watchlist"]})

        item = WatchlistItem.create(command.user_id, command.product_id)
        repo.add(item)

        logger.info("watchlist_item_added", user_id=str(command.user_id), product_id=str(command.product_id))
        return str(item.id)

    @handle(RemoveFromWatchlist)
    def remove_from_watchlist(self, command):
        repo = current_domain.repository_for(WatchlistItem)
        item = repo.get(command.item_id)
        item.assert_owned_by(command.user_id)
        repo._dao.delete(item)

        logger.info("watchlist_item_removed", user_id=str(command.user_id), item_id=str(command.item_id))


@dataclass
class WatchlistEntry:
    item: WatchlistItem
    product: Product


def get_watchlist(user_id: str) -> list[WatchlistEntry]:
    items = current_domain.repository_for(WatchlistItem).for_user(user_id)
    products = current_domain.repository_for(Product).fetch_many(item.product_id for item in items)
    return [WatchlistEntry(item, products[str(item.product_id)]) for item in items if str(item.product_id) in products]


def get_watchlist_item(item_id: str) -> WatchlistItem:
    return current_domain.repository_for(WatchlistItem).get(item_id)
