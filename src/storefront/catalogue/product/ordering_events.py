"""Catalogue reacts to Ordering events: stock follows placed and cancelled orders."""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.order.events import OrderCancelled, OrderPlaced

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Product, stream_category="storefront::order")
class OrderStockEventHandler:
    """Reserves stock when an order is placed and returns it when the order is cancelled."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        for item in json.loads(event.items):
            self._apply(item, event.order_id, reserve=True)

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        for item in json.loads(event.items):
            self._apply(item, event.order_id, reserve=False)

    def _apply(self, item: dict, order_id, reserve: bool) -> None:
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(item["product_id"])
        except ObjectNotFoundError:
            logger.warning(
                "Ordered product no longer in catalogue",
                order_id=str(order_id),
                product_id=item["product_id"],
            )
            return

        if reserve:
            product.reserve_stock(item["quantity"])
        else:
            product.restock(item["quantity"], reason="order_cancelled")
        repo.add(product)

        logger.info(
            "Stock updated for order",
            order_id=str(order_id),
            product_id=str(product.id),
            stock=product.stock,
            reserved=reserve,
        )
