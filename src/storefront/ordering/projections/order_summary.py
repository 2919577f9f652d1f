"""Order summary: lightweight listing/history view."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.ordering.order.order import Order


@storefront.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    user_id = Identifier()
    customer_name = String(max_length=200)
    customer_email = String(max_length=254)
    status = String(required=True)
    total = Float(default=0.0)
    item_count = Integer(default=0)
    payment_method = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    def to_dict(self) -> dict:
        return {
            "order_id": str(self.order_id),
            "user_id": str(self.user_id) if self.user_id else None,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "status": self.status,
            "total": self.total,
            "item_count": self.item_count,
            "payment_method": self.payment_method,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@storefront.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        items = json.loads(event.items) if isinstance(event.items, str) else []
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                user_id=event.user_id,
                customer_name=event.customer_name,
                customer_email=event.customer_email,
                status="pending",
                total=event.total,
                item_count=sum(int(item.get("quantity", 0)) for item in items),
                payment_method=event.payment_method,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = event.new_status
        summary.updated_at = event.changed_at
        repo.add(summary)


def orders_for_user(user_id) -> list[OrderSummary]:
    """Newest first."""
    repo = current_domain.repository_for(OrderSummary)
    summaries = repo._dao.query.filter(user_id=str(user_id)).limit(None).all().items
    return sorted(summaries, key=lambda s: s.created_at, reverse=True)


def all_orders(status=None) -> list[OrderSummary]:
    repo = current_domain.repository_for(OrderSummary)
    query = repo._dao.query
    if status:
        query = query.filter(status=status)
    return sorted(query.limit(None).all().items, key=lambda s: s.created_at, reverse=True)
