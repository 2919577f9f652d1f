"""Catalogue API package."""

from storefront.catalogue.api.routes import (
    category_router,
    product_router,
    search_router,
    stock_alert_router,
)

__all__ = ["category_router", "product_router", "search_router", "stock_alert_router"]
