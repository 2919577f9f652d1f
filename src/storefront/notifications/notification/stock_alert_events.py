"""Notifications reacts to stock alerts with a back-in-stock email."""

from protean.utils.mixins import handle

from storefront.catalogue.stock_alert.events import StockAlertSent
from storefront.domain import storefront
from storefront.notifications.notification.helpers import create_customer_notification
from storefront.notifications.notification.notification import Notification, NotificationType


@storefront.event_handler(part_of=Notification, stream_category="storefront::stock_subscription")
class StockAlertEventsHandler:
    @handle(StockAlertSent)
    def on_stock_alert_sent(self, event: StockAlertSent) -> None:
        create_customer_notification(
            event.email,
            NotificationType.BACK_IN_STOCK.value,
            {"product_id": str(event.product_id), "product_name": event.product_name},
            source_event_type="Storefront.StockAlertSent.v1",
        )
