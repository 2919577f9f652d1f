"""Shared BDD fixtures and step definitions for the Catalogue."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.events import CategoryCreated, CategoryUpdated
from storefront.catalogue.product.events import (
    ProductBackInStock,
    ProductCreated,
    ProductUpdated,
    StockAdjusted,
)
from storefront.catalogue.product.product import Product

# Map event name strings to classes for dynamic lookup
_EVENT_CLASSES = {
    "ProductCreated": ProductCreated,
    "ProductUpdated": ProductUpdated,
    "StockAdjusted": StockAdjusted,
    "ProductBackInStock": ProductBackInStock,
    "CategoryCreated": CategoryCreated,
    "CategoryUpdated": CategoryUpdated,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a product with {stock:d} units in stock"), target_fixture="product")
def product_with_stock(stock):
    product = Product.create(
        name="Neon Tetra (pack of 10)",
        description="Peaceful schooling fish",
        price=450.0,
        image_url="https://cdn.example.com/neon-tetra.jpg",
        category="Fish",
        stock=stock,
    )
    product._events.clear()
    return product


@given(parsers.cfparse('a category named "{name}"'), target_fixture="category")
def named_category(name):
    category = Category.create(name=name)
    category._events.clear()
    return category


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product has {stock:d} units in stock"))
def product_stock_is(product, stock):
    assert product.stock == stock


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(request, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    aggregate = request.getfixturevalue("category" if event_type.startswith("Category") else "product")
    assert any(isinstance(e, event_cls) for e in aggregate._events)


@then(parsers.cfparse("no {event_type} event is raised"))
def event_not_raised(product, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert not any(isinstance(e, event_cls) for e in product._events)


@then("the action fails with a validation error")
def action_fails(error):
    assert error["exc"] is not None
    assert isinstance(error["exc"], ValidationError)
