"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's details, pricing or merchandising flags changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    compare_at_price: Float()


@storefront.event(part_of="Product")
class StockAdjusted:
    """A product's stock level changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_level: Integer(required=True)
    new_level: Integer(required=True)
    reason: String()


@storefront.event(part_of="Product")
class ProductBackInStock:
    """A product that was sold out has stock again."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    stock: Integer(required=True)
