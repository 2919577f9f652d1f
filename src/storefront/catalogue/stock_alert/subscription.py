"""StockSubscription aggregate: a shopper waiting for a sold-out product."""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, ValueObject

from storefront.domain import storefront
from storefront.identity.shared.email import EmailAddress


class SubscriptionStatus(Enum):
    PENDING = "Pending"
    NOTIFIED = "Notified"


@storefront.aggregate
class StockSubscription:
    email: ValueObject(EmailAddress, required=True)
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    status: String(choices=SubscriptionStatus, default=SubscriptionStatus.PENDING.value)
    created_at: DateTime(default=datetime.now)
    notified_at: DateTime()

    @classmethod
    def subscribe(cls, email, product_id, product_name):
        from storefront.catalogue.stock_alert.events import StockAlertRequested

        now = datetime.now()
        subscription = cls(
            email=EmailAddress(address=email.strip().lower()),
            product_id=product_id,
            product_name=product_name,
            status=SubscriptionStatus.PENDING.value,
            created_at=now,
        )
        subscription.raise_(
            StockAlertRequested(
                subscription_id=subscription.id,
                email=subscription.email.address,
                product_id=product_id,
                product_name=product_name,
                requested_at=now,
            )
        )
        return subscription

    @property
    def is_pending(self) -> bool:
        return self.status == SubscriptionStatus.PENDING.value

    def mark_notified(self):
        from storefront.catalogue.stock_alert.events import StockAlertSent

        if not self.is_pending:
            raise ValidationError({"status": ["Subscriber has already been notified"]})

        now = datetime.now()
        self.status = SubscriptionStatus.NOTIFIED.value
        self.notified_at = now

        self.raise_(
            StockAlertSent(
                subscription_id=self.id,
                email=self.email.address,
                product_id=self.product_id,
                product_name=self.product_name,
                notified_at=now,
            )
        )
