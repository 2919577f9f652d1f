"""Welcome template: sent when a shopper creates an account."""

from html import escape

from storefront.notifications.notification.notification import (
    NotificationChannel,
    NotificationType,
)
from storefront.notifications.templates.layout import html_frame


class WelcomeTemplate:
    notification_type = NotificationType.WELCOME.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("full_name", "there")
        store_name = context.get("store_name", "our store")
        return {
            "subject": f"Welcome to {store_name}, {name}!",
            "body": (
                f"Hi {name},\n\n"
                f"Welcome to {store_name}! Your account is ready.\n\n"
                "Browse our catalogue and check out whenever you're ready."
            ),
            "html_body": html_frame(
                f"Welcome to {store_name}!",
                f"<p>Hi {escape(name)},</p><p>Your account is ready. Happy shopping!</p>",
                store_name,
            ),
        }
