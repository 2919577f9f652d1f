"""Order placement and status management: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Address, Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier()  # Empty for guest checkout
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    shipping_address = Text(required=True)  # JSON: address dict
    billing_address = Text()  # JSON: address dict, defaults to shipping
    payment_method = String(required=True, max_length=50)
    notes = Text()


@storefront.command(part_of="Order")
class CheckoutCart:
    cart_id = Identifier(required=True)
    user_id = Identifier()
    shipping_address = Text(required=True)
    billing_address = Text()
    payment_method = String(required=True, max_length=50)
    notes = Text()


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    note = String(max_length=500)


_ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
    "country",
)


def _load_json(raw):
    if raw is None or not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError({"payload": ["Malformed JSON"]}) from None


def _build_address(data):
    if not isinstance(data, dict):
        raise ValidationError({"shipping_address": ["Address details are required"]})
    return Address(**{field: data.get(field) for field in _ADDRESS_FIELDS})


def _price_lines(requested):
    """Turn ``[{product_id, quantity}]`` into priced order lines from the catalogue.

    Prices come from the current product, never from the client.
    """
    if not requested:
        raise ValidationError({"items": ["An order must contain at least one item"]})

    product_repo = current_domain.repository_for(Product)
    lines = []
    wanted = {}
    for entry in requested:
        quantity = int(entry.get("quantity") or 0)
        if quantity < 1:
            raise ValidationError({"items": ["Quantity must be at least 1"]})
        product = product_repo.get(entry["product_id"])
        wanted[str(product.id)] = wanted.get(str(product.id), 0) + quantity
        # Stock is checked against every line for the same product combined
        if product.stock < wanted[str(product.id)]:
            raise ValidationError({"items": [f"Only {product.stock} of {product.name} left in stock"]})
        lines.append(
            {
                "product_id": str(product.id),
                "name": product.name,
                "price": product.price,
                "quantity": quantity,
                "image_url": product.image_url,
            }
        )
    return lines


def _place(user_id, lines, shipping_raw, billing_raw, payment_method, notes):
    shipping = _build_address(_load_json(shipping_raw))
    billing_data = _load_json(billing_raw)
    billing = _build_address(billing_data) if billing_data else None

    order = Order.place(
        items=lines,
        shipping_address=shipping,
        billing_address=billing,
        payment_method=payment_method,
        user_id=user_id,
        notes=notes,
    )
    current_domain.repository_for(Order).add(order)
    logger.info(
        "Order placed",
        order_id=str(order.id),
        user_id=str(user_id) if user_id else None,
        total=order.total,
        items=len(lines),
    )
    return str(order.id)


@storefront.command_handler(part_of=Order)
class OrderPlacementHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = _price_lines(_load_json(command.items))
        return _place(
            command.user_id,
            lines,
            command.shipping_address,
            command.billing_address,
            command.payment_method,
            command.notes,
        )

    @handle(CheckoutCart)
    def checkout_cart(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)
        if not cart.items:
            raise ValidationError({"cart": ["Your cart is empty"]})

        lines = _price_lines([{"product_id": i.product_id, "quantity": i.quantity} for i in cart.items])
        order_id = _place(
            command.user_id,
            lines,
            command.shipping_address,
            command.billing_address,
            command.payment_method,
            command.notes,
        )

        cart.clear()
        cart_repo.add(cart)
        return order_id

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_status(command.status, note=command.note)
        repo.add(order)
        logger.info("Order status changed", order_id=str(order.id), status=order.status)
