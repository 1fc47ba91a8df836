"""Catalogue domain API package."""

from catalogue.api.routes import banner_router, category_router, product_router

__all__ = ["banner_router", "category_router", "product_router"]
