"""Order aggregate: a placed purchase and its fulfilment status.

Orders are created in ``pending`` status whatever the caller asks for, and
the total is always recomputed from the line items. Guests may check out,
in which case ``user_id`` is empty and the shipping address carries the
contact details.

State Machine (5 states):
    pending → processing → shipped → delivered
    pending → cancelled
    processing → cancelled
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.ordering.shared.regions import is_india, normalize_state


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank-transfer"
    CASH_ON_DELIVERY = "cash-on-delivery"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Address:
    """Contact and delivery details captured at checkout.

    Immutable once recorded: it is where this order went, regardless of
    later changes to the shopper's profile.
    """

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=20)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    @invariant.post
    def contact_details_must_be_usable(self):
        errors = {}
        if len("".join(ch for ch in self.phone if ch.isdigit())) < 10:
            errors["phone"] = ["Valid phone number is required"]
        if len(self.zip_code.strip()) < 5:
            errors["zip_code"] = ["Zip code is required"]
        if "@" not in self.email:
            errors["email"] = ["Invalid email address"]
        if is_india(self.country) and normalize_state(self.state) is None:
            errors["state"] = [f"Unknown Indian state: {self.state}"]
        if errors:
            raise ValidationError(errors)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
        }


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=500)

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier()  # Null for guest checkout
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(Address, required=True)
    billing_address = ValueObject(Address)
    payment_method = String(choices=PaymentMethod, required=True)
    notes = Text()
    total = Float(default=0.0)
    status_note = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

    @classmethod
    def place(cls, items, shipping_address, payment_method, user_id=None, billing_address=None, notes=None):
        """Create a pending order from line item dicts (product_id, name, price, quantity, image_url)."""
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        order_items = [
            OrderItem(
                product_id=item["product_id"],
                name=item["name"],
                price=item["price"],
                quantity=item["quantity"],
                image_url=item.get("image_url"),
            )
            for item in items
        ]
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            items=order_items,
            shipping_address=shipping_address,
            billing_address=billing_address or shipping_address,
            payment_method=payment_method,
            notes=notes,
            total=round(sum(i.line_total for i in order_items), 2),
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id) if user_id else None,
                customer_name=shipping_address.full_name,
                customer_email=shipping_address.email,
                items=json.dumps(order.item_dicts()),
                shipping_address=json.dumps(shipping_address.to_dict()),
                payment_method=payment_method,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    def item_dicts(self) -> list[dict]:
        return [
            {
                "product_id": str(i.product_id),
                "name": i.name,
                "price": i.price,
                "quantity": i.quantity,
                "image_url": i.image_url,
            }
            for i in self.items
        ]

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    def belongs_to(self, user_id) -> bool:
        return self.user_id is not None and str(self.user_id) == str(user_id)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status, note=None):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        self._assert_can_transition(target)

        now = datetime.now(UTC)
        previous = self.status
        self.status = target.value
        self.status_note = note
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id) if self.user_id else None,
                customer_email=self.shipping_address.email,
                customer_name=self.shipping_address.full_name,
                previous_status=previous,
                new_status=target.value,
                note=note,
                changed_at=now,
            )
        )

        if target == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    items=json.dumps(self.item_dicts()),
                    reason=note,
                    cancelled_at=now,
                )
            )

    def to_dict_detail(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id) if self.user_id else None,
            "status": self.status,
            "items": self.item_dicts(),
            "shipping_address": self.shipping_address.to_dict(),
            "billing_address": (self.billing_address or self.shipping_address).to_dict(),
            "payment_method": self.payment_method,
            "notes": self.notes,
            "total": self.total,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
