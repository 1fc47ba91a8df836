"""Watchlist aggregate: products a user keeps an eye on."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from shared.domain import storefront
from shared.errors import AuthorizationError


@storefront.aggregate
class WatchlistItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    created_at = DateTime()

    @classmethod
    def create(cls, user_id, product_id):
        return cls(user_id=user_id, product_id=product_id, created_at=datetime.now(UTC))

    def assert_owned_by(self, user_id):
        if str(self.user_id) != str(user_id):
            raise AuthorizationError("This watchlist item belongs to another user")


@storefront.repository(part_of=WatchlistItem)
class WatchlistRepository:
    def find_entry(self, user_id, product_id) -> WatchlistItem | None:
        return self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first

    def for_user(self, user_id) -> list[WatchlistItem]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("created_at").all().items
