"""Notifications reacts to Order events.

OrderPlaced emails the store's inbox (order received) and the shopper
(confirmation). OrderStatusChanged emails the shopper a status update.
"""

import json

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notifications.notification.helpers import (
    create_customer_notification,
    create_internal_notification,
)
from storefront.notifications.notification.notification import Notification, NotificationType
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Notification, stream_category="storefront::order")
class OrderingEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        context = {
            "order_id": str(event.order_id),
            "customer_name": event.customer_name,
            "items": json.loads(event.items),
            "shipping_address": json.loads(event.shipping_address),
            "payment_method": event.payment_method,
            "total": event.total,
            "placed_at": event.placed_at.strftime("%d %b %Y, %H:%M") if event.placed_at else "",
        }
        create_internal_notification(
            NotificationType.ORDER_RECEIVED.value,
            context,
            source_event_type="Storefront.OrderPlaced.v1",
        )
        create_customer_notification(
            event.customer_email,
            NotificationType.ORDER_CONFIRMATION.value,
            context,
            source_event_type="Storefront.OrderPlaced.v1",
        )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        create_customer_notification(
            event.customer_email,
            NotificationType.ORDER_STATUS_UPDATE.value,
            {
                "order_id": str(event.order_id),
                "customer_name": event.customer_name,
                "previous_status": event.previous_status,
                "new_status": event.new_status,
                "note": event.note,
            },
            source_event_type="Storefront.OrderStatusChanged.v1",
        )
