"""Order status template: sent when an administrator moves an order along."""

from html import escape

from storefront.notifications.notification.notification import (
    NotificationChannel,
    NotificationType,
)
from storefront.notifications.templates.layout import html_frame

_MESSAGES = {
    "processing": "We're preparing your order.",
    "shipped": "Your order is on its way.",
    "delivered": "Your order has been delivered. Enjoy!",
    "cancelled": "Your order has been cancelled.",
}


class OrderStatusUpdateTemplate:
    notification_type = NotificationType.ORDER_STATUS_UPDATE.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        status = context.get("new_status", "updated")
        message = _MESSAGES.get(status, f"Your order is now {status}.")
        note = context.get("note")
        body = f"Order #{order_id}: {message}"
        if note:
            body += f"\n\nNote from the store: {note}"
        return {
            "subject": f"Order #{order_id} is {status.capitalize()}",
            "body": body,
            "html_body": html_frame(
                f"Order {status.capitalize()}",
                f"<p>Order <strong>#{escape(str(order_id))}</strong>: {escape(message)}</p>"
                + (f"<p><em>{escape(note)}</em></p>" if note else ""),
                context.get("store_name", ""),
            ),
        }
