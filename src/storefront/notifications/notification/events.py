"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Notification")
class NotificationCreated:
    """A notification was created and queued for dispatch."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    recipient_type: String(required=True)
    notification_type: String(required=True)
    channel: String(required=True)
    subject: String()
    source_event_type: String()
    created_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationSent:
    """A notification was accepted by the channel adapter."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    channel: String(required=True)
    sent_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationFailed:
    """A notification could not be sent."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    channel: String(required=True)
    reason: String(required=True)
    retry_count: Integer(required=True)
    max_retries: Integer(required=True)
    failed_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationRetried:
    """A failed notification was queued again."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    channel: String(required=True)
    retry_count: Integer(required=True)
    retried_at: DateTime(required=True)
