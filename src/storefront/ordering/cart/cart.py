"""Shopping Cart aggregate: the items a shopper intends to buy.

A cart belongs either to a browser session (guest) or to a signed-in user.
Each line snapshots the product's name, price and image at the time it was
added, so the cart renders without another catalogue lookup. Checkout
turns the lines into an Order and empties the cart.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier()  # Null for guest carts
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id=None, session_id=None):
        if not user_id and not session_id:
            raise ValidationError({"cart": ["A cart needs a user or a session"]})
        now = datetime.now(UTC)
        return cls(user_id=user_id, session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    def _find(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, price, quantity=1, image_url=None):
        """Add a product line, or increase the quantity of the existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    name=name,
                    price=price,
                    image_url=image_url,
                    quantity=quantity,
                    added_at=now,
                )
            )
            new_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=new_quantity,
            )
        )

    def update_quantity(self, product_id, quantity):
        """Set a line's quantity. Zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self._find(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self._find(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id)))

    def to_dict_summary(self) -> dict:
        return {
            "cart_id": str(self.id),
            "items": [
                {
                    "product_id": str(item.product_id),
                    "name": item.name,
                    "price": item.price,
                    "image_url": item.image_url,
                    "quantity": item.quantity,
                }
                for item in self.items
            ],
            "count": self.count,
            "total": self.total,
        }
