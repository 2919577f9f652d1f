"""Drops cached storefront listings whenever catalogue data changes."""

import structlog
from protean.utils.mixins import handle

from storefront.caching import get_server_cache
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.events import CategoryCreated, CategoryUpdated
from storefront.catalogue.product.events import ProductCreated, ProductUpdated, StockAdjusted
from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

CATALOGUE_CACHE_PREFIX = "catalogue:"


def invalidate_catalogue_cache(reason: str) -> None:
    removed = get_server_cache().invalidate_prefix(CATALOGUE_CACHE_PREFIX)
    logger.debug("Catalogue cache invalidated", reason=reason, entries=removed)


@storefront.event_handler(part_of=Product)
class ProductCacheInvalidator:
    @handle(ProductCreated)
    def on_product_created(self, event: ProductCreated) -> None:
        invalidate_catalogue_cache("product_created")

    @handle(ProductUpdated)
    def on_product_updated(self, event: ProductUpdated) -> None:
        invalidate_catalogue_cache("product_updated")

    @handle(StockAdjusted)
    def on_stock_adjusted(self, event: StockAdjusted) -> None:
        invalidate_catalogue_cache("stock_adjusted")


@storefront.event_handler(part_of=Category)
class CategoryCacheInvalidator:
    @handle(CategoryCreated)
    def on_category_created(self, event: CategoryCreated) -> None:
        invalidate_catalogue_cache("category_created")

    @handle(CategoryUpdated)
    def on_category_updated(self, event: CategoryUpdated) -> None:
        invalidate_catalogue_cache("category_updated")
