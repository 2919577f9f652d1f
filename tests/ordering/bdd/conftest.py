"""Shared BDD fixtures and step definitions for Ordering."""

import pytest
from pytest_bdd import given, parsers
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Address, Order


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a guest cart", target_fixture="cart")
def guest_cart():
    return ShoppingCart.create(session_id="browser-1")


@given(parsers.cfparse("a {status} order"), target_fixture="order")
def order_in_status(status, address):
    order = Order.place(
        items=[{"product_id": "p1", "name": "Neon Tetra", "price": 450.0, "quantity": 2}],
        shipping_address=Address(**address),
        payment_method="cash-on-delivery",
    )
    path = {
        "pending": [],
        "processing": ["processing"],
        "shipped": ["processing", "shipped"],
        "delivered": ["processing", "shipped", "delivered"],
        "cancelled": ["cancelled"],
    }[status]
    for step in path:
        order.change_status(step)
    order._events.clear()
    return order
