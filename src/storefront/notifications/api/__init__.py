"""Notifications admin API package."""

from storefront.notifications.api.routes import router

__all__ = ["router"]
