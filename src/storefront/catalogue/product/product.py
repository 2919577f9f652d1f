"""Product aggregate root: a sellable item in the storefront catalogue."""

import json
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

_MERCHANDISING_FLAGS = ("is_new", "is_sale", "is_featured", "is_trending")


@storefront.aggregate
class Product:
    """A product listed in the storefront.

    Prices are in rupees. ``compare_at_price`` is the struck-through "was"
    price shown on sale items and must exceed the current price. Tags are
    stored as a JSON array and are searchable alongside name, description
    and category.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.01)
    compare_at_price: Float()
    image_url: String(required=True, max_length=500)
    category: String(required=True, max_length=100)
    tags: Text()
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    is_new: Boolean(default=False)
    is_sale: Boolean(default=False)
    is_featured: Boolean(default=False)
    is_trending: Boolean(default=False)
    stock: Integer(default=0, min_value=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def compare_at_price_must_exceed_price(self):
        if self.compare_at_price is not None and self.compare_at_price <= self.price:
            raise ValidationError({"compare_at_price": ["Compare-at price must be greater than the price"]})

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        image_url,
        category,
        compare_at_price=None,
        tags=None,
        rating=0.0,
        is_new=False,
        is_sale=False,
        is_featured=False,
        is_trending=False,
        stock=0,
    ):
        from storefront.catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            compare_at_price=compare_at_price,
            image_url=image_url,
            category=category,
            tags=json.dumps(list(tags or [])),
            rating=round(rating or 0.0, 1),
            is_new=is_new,
            is_sale=is_sale,
            is_featured=is_featured,
            is_trending=is_trending,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        compare_at_price=_UNSET,
        image_url=_UNSET,
        category=_UNSET,
        tags=_UNSET,
        rating=_UNSET,
        **flags,
    ):
        """Apply a partial update. Only arguments that are passed are changed.

        ``compare_at_price`` may be passed as None to clear it. Stock is not
        changed here; use ``adjust_stock``.
        """
        from storefront.catalogue.product.events import ProductUpdated

        unknown = set(flags) - set(_MERCHANDISING_FLAGS)
        if unknown:
            raise ValidationError({"product": [f"Unknown fields: {', '.join(sorted(unknown))}"]})

        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        if price is not _UNSET:
            self.price = price
        if compare_at_price is not _UNSET:
            self.compare_at_price = compare_at_price
        if image_url is not _UNSET:
            self.image_url = image_url
        if category is not _UNSET:
            self.category = category
        if tags is not _UNSET:
            self.tags = json.dumps(list(tags or []))
        if rating is not _UNSET:
            self.rating = round(rating, 1)
        for flag, value in flags.items():
            setattr(self, flag, bool(value))

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=self.price,
                compare_at_price=self.compare_at_price,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def adjust_stock(self, new_level, reason="adjustment"):
        """Set the stock level. Going from zero to positive announces a restock."""
        from storefront.catalogue.product.events import ProductBackInStock, StockAdjusted

        if new_level < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock
        self.stock = new_level
        self.updated_at = datetime.now()

        self.raise_(
            StockAdjusted(
                product_id=self.id,
                previous_level=previous,
                new_level=new_level,
                reason=reason,
            )
        )

        if previous == 0 and new_level > 0:
            self.raise_(
                ProductBackInStock(
                    product_id=self.id,
                    name=self.name,
                    stock=new_level,
                )
            )

    def reserve_stock(self, quantity):
        """Take ``quantity`` units for an order. Stock never drops below zero."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self.adjust_stock(max(self.stock - quantity, 0), reason="order")

    def restock(self, quantity, reason="restock"):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self.adjust_stock(self.stock + quantity, reason=reason)
