"""Shared fixtures for catalogue tests."""

import json

import pytest
from protean.utils.globals import current_domain
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct


@pytest.fixture()
def make_category():
    """Factory: create a category through its command handler and return its id."""

    def _make(**overrides):
        defaults = {"name": "Women", "image_url": "https://img.example.com/women.jpg"}
        defaults.update(overrides)
        return current_domain.process(CreateCategory(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def make_product():
    """Factory: create a product through its command handler and return its id."""

    def _make(**overrides):
        defaults = {
            "name": "Linen Kurta",
            "description": "Breathable summer kurta in pure linen",
            "price": 1499.0,
            "image_url": "https://img.example.com/kurta.jpg",
            "category": "Women",
            "stock": 10,
        }
        if isinstance(overrides.get("tags"), list):
            overrides["tags"] = json.dumps(overrides["tags"])
        defaults.update(overrides)
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def women_category(make_category):
    return make_category(name="Women")


@pytest.fixture()
def product_id(women_category, make_product):
    return make_product()
