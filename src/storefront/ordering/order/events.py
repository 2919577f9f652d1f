"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A shopper checked out. Items and address are JSON snapshots."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier()
    customer_name = String(required=True)
    customer_email = String(required=True)
    items = Text(required=True)
    shipping_address = Text(required=True)
    payment_method = String(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order along its fulfilment path."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier()
    customer_email = String(required=True)
    customer_name = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    note = String()
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The order will not ship; its items go back to stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    items = Text(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)
