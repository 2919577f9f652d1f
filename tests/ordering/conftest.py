"""Shared fixtures for ordering tests."""

import json

import pytest
from protean.utils.globals import current_domain
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct
from storefront.ordering.order.placement import PlaceOrder

ADDRESS = {
    "first_name": "Asha",
    "last_name": "Verma",
    "email": "asha@example.com",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
    "country": "India",
}


@pytest.fixture()
def address():
    return dict(ADDRESS)


@pytest.fixture()
def make_product():
    """Factory: list a product (in the "Fish" category) and return its id."""
    current_domain.process(CreateCategory(name="Fish"), asynchronous=False)

    def _make(name="Neon Tetra", price=450.0, stock=20):
        return current_domain.process(
            CreateProduct(
                name=name,
                description=f"{name} for community tanks",
                price=price,
                image_url="https://cdn.example.com/fish.jpg",
                category="Fish",
                stock=stock,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def place_order(address):
    """Factory: place an order for ``[(product_id, quantity), ...]`` and return its id."""

    def _place(lines, user_id=None, payment_method="cash-on-delivery", shipping=None):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
                shipping_address=json.dumps(shipping or address),
                payment_method=payment_method,
            ),
            asynchronous=False,
        )

    return _place
