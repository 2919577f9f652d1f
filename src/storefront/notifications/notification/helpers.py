"""Shared helpers for notification event handlers.

Provides the common pattern: render template → create one Notification
per default channel for the recipient.
"""

import json

import structlog
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.notifications.notification.notification import Notification, RecipientType
from storefront.notifications.templates import get_template

logger = structlog.get_logger(__name__)


def _create(recipient, recipient_type, notification_type, context, source_event_type):
    template_cls = get_template(notification_type)
    context = {"store_name": get_settings().store_name, **context}
    rendered = template_cls.render(context)

    repo = current_domain.repository_for(Notification)
    notification_ids = []
    for channel in template_cls.default_channels:
        notification = Notification.create(
            recipient=recipient,
            notification_type=notification_type,
            channel=channel,
            subject=rendered.get("subject"),
            body=rendered["body"],
            html_body=rendered.get("html_body"),
            recipient_type=recipient_type,
            source_event_type=source_event_type,
            context_data=json.dumps(context, default=str),
        )
        repo.add(notification)
        notification_ids.append(str(notification.id))

    logger.info(
        "Notifications created",
        recipient=recipient,
        recipient_type=recipient_type,
        notification_type=notification_type,
        count=len(notification_ids),
    )
    return notification_ids


def create_customer_notification(
    email: str,
    notification_type: str,
    context: dict,
    source_event_type: str | None = None,
) -> list[str]:
    """Create notification(s) addressed to a shopper.

    Returns:
        List of notification IDs created.
    """
    if not email:
        logger.warning("No recipient address, notification skipped", notification_type=notification_type)
        return []
    return _create(email, RecipientType.CUSTOMER.value, notification_type, context, source_event_type)


def create_internal_notification(
    notification_type: str,
    context: dict,
    source_event_type: str | None = None,
) -> list[str]:
    """Create notification(s) for the store's admin inbox (``ADMIN_EMAIL``)."""
    admin_email = get_settings().admin_email
    if not admin_email:
        logger.warning("ADMIN_EMAIL not configured, internal notification skipped", notification_type=notification_type)
        return []
    return _create(admin_email, RecipientType.INTERNAL.value, notification_type, context, source_event_type)
