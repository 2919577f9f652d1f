"""Template registry: maps NotificationType to template classes.

Each template knows its default channels and how to render subject, text
body and HTML body from event context data.
"""

from storefront.notifications.notification.notification import NotificationType
from storefront.notifications.templates.back_in_stock import BackInStockTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.order_received import OrderReceivedTemplate
from storefront.notifications.templates.order_status_update import OrderStatusUpdateTemplate
from storefront.notifications.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.ORDER_RECEIVED.value: OrderReceivedTemplate,
    NotificationType.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationType.BACK_IN_STOCK.value: BackInStockTemplate,
    NotificationType.WELCOME.value: WelcomeTemplate,
    NotificationType.ORDER_STATUS_UPDATE.value: OrderStatusUpdateTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
