"""Stock alerts react to Product events: restocked products notify their subscribers."""

import structlog
from protean.utils.mixins import handle

from storefront.catalogue.product.events import ProductBackInStock
from storefront.catalogue.stock_alert.management import notify_subscribers
from storefront.catalogue.stock_alert.subscription import StockSubscription
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=StockSubscription, stream_category="storefront::product")
class BackInStockEventHandler:
    @handle(ProductBackInStock)
    def on_product_back_in_stock(self, event: ProductBackInStock) -> None:
        notified = notify_subscribers(event.product_id, event.name)
        logger.info("Back-in-stock alerts processed", product_id=str(event.product_id), notified=notified)
