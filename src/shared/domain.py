"""Domain initialization and configuration.

One domain holds every aggregate of the storefront. Committing an order
touches product stock, the buyer's cart and the order itself, and all three
have to share a provider and a unit of work.
"""

from protean.domain import Domain

from shared.config import get_settings
from shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

_initialized = False


def _register_elements():
    """Import every module that registers an element with ``storefront``."""
    import catalogue.banner.banner  # noqa: F401
    import catalogue.banner.management  # noqa: F401
    import catalogue.category.category  # noqa: F401
    import catalogue.category.management  # noqa: F401
    import catalogue.product.management  # noqa: F401
    import catalogue.product.product  # noqa: F401
    import identity.session.session  # noqa: F401
    import identity.user.authentication  # noqa: F401
    import identity.user.password  # noqa: F401
    import identity.user.profile  # noqa: F401
    import identity.user.registration  # noqa: F401
    import identity.user.user  # noqa: F401
    import notifications.inquiry.inquiry  # noqa: F401
    import notifications.inquiry.submission  # noqa: F401
    import ordering.cart.cart  # noqa: F401
    import ordering.cart.items  # noqa: F401
    import ordering.order.creation  # noqa: F401
    import ordering.order.order  # noqa: F401
    import ordering.order.status  # noqa: F401
    import ordering.watchlist.management  # noqa: F401
    import ordering.watchlist.watchlist  # noqa: F401
    import reviews.review.moderation  # noqa: F401
    import reviews.review.review  # noqa: F401
    import reviews.review.submission  # noqa: F401


def init_domain() -> Domain:
    """Register all elements and initialize the domain once per process.

    ``DATABASE_URL`` overrides the database configured in ``domain.toml``.
    """
    global _initialized
    if _initialized:
        return storefront

    database_url = get_settings().database_url
    if database_url:
        provider = "postgresql" if database_url.startswith("postgres") else "sqlite"
        storefront.config["databases"]["default"] = {"provider": provider, "database_uri": database_url}

    _register_elements()
    storefront.init()
    _initialized = True

    logger.debug("domain_initialized", domain=storefront.name)
    return storefront
