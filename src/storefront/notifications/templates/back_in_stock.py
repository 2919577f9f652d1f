"""Back-in-stock template: sent to shoppers who asked to hear about a restock."""

from html import escape

from storefront.notifications.notification.notification import (
    NotificationChannel,
    NotificationType,
)
from storefront.notifications.templates.layout import BRAND_COLOUR, html_frame


class BackInStockTemplate:
    notification_type = NotificationType.BACK_IN_STOCK.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        product_name = context.get("product_name", "A product you wanted")
        product_url = context.get("product_url", "")
        button = ""
        if product_url:
            button = (
                '<div style="margin: 30px 0; text-align: center;">'
                f'<a href="{escape(product_url)}" style="background-color: {BRAND_COLOUR}; color: white; '
                'padding: 12px 24px; text-decoration: none; border-radius: 4px; font-weight: bold;">Shop Now</a>'
                "</div>"
            )
        return {
            "subject": f"{product_name} Is Now Available!",
            "body": (
                "Product Now Available!\n\n"
                "Good News!\n"
                f"We're happy to inform you that {product_name} is now back in stock.\n\n"
                "Visit our store to place your order before it's gone again!\n\n"
                "Thank you for your patience and continued interest in our products."
            ),
            "html_body": html_frame(
                "Product Now Available!",
                "<h2>Good News!</h2>"
                f"<p>We're happy to inform you that <strong>{escape(product_name)}</strong> is now back in stock.</p>"
                "<p>Visit our store to place your order before it's gone again!</p>"
                f"{button}"
                "<p>Thank you for your patience and continued interest in our products.</p>",
                context.get("store_name", ""),
            ),
        }
