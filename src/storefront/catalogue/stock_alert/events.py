"""Domain events for stock alert subscriptions."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="StockSubscription")
class StockAlertRequested:
    """A shopper asked to be told when a product is back in stock."""

    __version__ = 1

    subscription_id: Identifier(required=True)
    email: String(required=True)
    product_id: Identifier(required=True)
    product_name: String(required=True)
    requested_at: DateTime(required=True)


@storefront.event(part_of="StockSubscription")
class StockAlertSent:
    """A subscriber was emailed that their product is available again."""

    __version__ = 1

    subscription_id: Identifier(required=True)
    email: String(required=True)
    product_id: Identifier(required=True)
    product_name: String(required=True)
    notified_at: DateTime(required=True)
