"""Notifications domain API package."""

from notifications.api.routes import inquiry_router

__all__ = ["inquiry_router"]
