"""Order confirmation template: sent to the shopper when an order is placed."""

from html import escape

from storefront.notifications.notification.notification import (
    NotificationChannel,
    NotificationType,
)
from storefront.notifications.templates.layout import html_frame
from storefront.ordering.shared.pricing import format_price


class OrderConfirmationTemplate:
    notification_type = NotificationType.ORDER_CONFIRMATION.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        customer_name = context.get("customer_name", "there")
        total = format_price(context.get("total", 0))
        store_name = context.get("store_name", "")
        lines = "\n".join(
            f"  {item.get('quantity')} x {item.get('name')}" for item in context.get("items", [])
        )
        return {
            "subject": f"Order #{order_id} Confirmed",
            "body": (
                f"Hi {customer_name},\n\n"
                f"Thank you for your order #{order_id}.\n\n"
                f"{lines}\n\n"
                f"Order Total: {total}\n\n"
                "We'll let you know as soon as it ships.\n\n"
                f"Thank you for shopping with {store_name}!"
            ),
            "html_body": html_frame(
                "Thank You for Your Order!",
                f"<p>Hi {escape(customer_name)},</p>"
                f"<p>We've received your order <strong>#{escape(str(order_id))}</strong>.</p>"
                f"<p><strong>Order Total:</strong> {total}</p>"
                "<p>We'll let you know as soon as it ships.</p>",
                store_name,
            ),
        }
