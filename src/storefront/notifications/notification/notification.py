"""Notification aggregate: tracks a single outbound email.

Each notification represents one message sent to one recipient. They are
created reactively from storefront events (orders, registrations, stock
alerts) and dispatched through the email channel adapter.

State Machine (3 states):
    PENDING → SENT
    PENDING → FAILED → (retry) → PENDING
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.notifications.notification.events import (
    NotificationCreated,
    NotificationFailed,
    NotificationRetried,
    NotificationSent,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    ORDER_RECEIVED = "OrderReceived"
    ORDER_CONFIRMATION = "OrderConfirmation"
    BACK_IN_STOCK = "BackInStock"
    WELCOME = "Welcome"
    ORDER_STATUS_UPDATE = "OrderStatusUpdate"


class NotificationChannel(Enum):
    EMAIL = "Email"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


class RecipientType(Enum):
    CUSTOMER = "Customer"
    INTERNAL = "Internal"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.FAILED: {NotificationStatus.PENDING},  # Via retry
    NotificationStatus.SENT: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Notification:
    """An email to a shopper or to the store's own inbox."""

    # Recipient
    recipient: String(required=True, max_length=254)
    recipient_type: String(choices=RecipientType, default=RecipientType.CUSTOMER.value)

    # Notification type and channel
    notification_type: String(choices=NotificationType, required=True)
    channel: String(choices=NotificationChannel, default=NotificationChannel.EMAIL.value)

    # Content
    subject: String(max_length=500)
    body: Text(required=True)
    html_body: Text()

    # Source event correlation
    source_event_type: String(max_length=200)
    context_data: Text()  # JSON data used to render the template

    # Status
    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)

    # Delivery tracking
    sent_at: DateTime()
    message_id: String(max_length=200)
    failure_reason: String(max_length=500)

    # Retry
    retry_count: Integer(default=0)
    max_retries: Integer(default=3)

    # Timestamps
    created_at: DateTime()
    updated_at: DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        recipient,
        notification_type,
        body,
        subject=None,
        html_body=None,
        recipient_type=RecipientType.CUSTOMER.value,
        channel=NotificationChannel.EMAIL.value,
        source_event_type=None,
        context_data=None,
        max_retries=3,
    ):
        """Create a new notification in PENDING status."""
        now = datetime.now(UTC)

        notification = cls(
            recipient=recipient,
            recipient_type=recipient_type,
            notification_type=notification_type,
            channel=channel,
            subject=subject,
            body=body,
            html_body=html_body,
            source_event_type=source_event_type,
            context_data=context_data,
            status=NotificationStatus.PENDING.value,
            retry_count=0,
            max_retries=max_retries,
            created_at=now,
            updated_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient=recipient,
                recipient_type=recipient_type,
                notification_type=notification_type,
                channel=channel,
                subject=subject,
                source_event_type=source_event_type,
                created_at=now,
            )
        )

        return notification

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, message_id=None, sent_at=None):
        self._assert_can_transition(NotificationStatus.SENT)

        now = sent_at or datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.message_id = message_id
        self.sent_at = now
        self.updated_at = now

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                recipient=self.recipient,
                channel=self.channel,
                sent_at=now,
            )
        )

    def mark_failed(self, reason):
        """Mark notification as failed. Each failure counts against ``max_retries``."""
        self._assert_can_transition(NotificationStatus.FAILED)

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = reason[:500] if reason else reason
        self.retry_count = self.retry_count + 1
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient=self.recipient,
                channel=self.channel,
                reason=self.failure_reason,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
                failed_at=now,
            )
        )

    def retry(self):
        """Put a failed notification back in the queue."""
        if NotificationStatus(self.status) != NotificationStatus.FAILED:
            raise ValidationError({"status": ["Only failed notifications can be retried"]})
        if self.retry_count >= self.max_retries:
            raise ValidationError({"retry_count": ["Maximum retry attempts exceeded"]})

        now = datetime.now(UTC)
        self.status = NotificationStatus.PENDING.value
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            NotificationRetried(
                notification_id=str(self.id),
                recipient=self.recipient,
                channel=self.channel,
                retry_count=self.retry_count,
                retried_at=now,
            )
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "recipient": self.recipient,
            "recipient_type": self.recipient_type,
            "notification_type": self.notification_type,
            "channel": self.channel,
            "subject": self.subject,
            "status": self.status,
            "failure_reason": self.failure_reason,
            "retry_count": self.retry_count,
            "max_retries": self.max_retries,
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
