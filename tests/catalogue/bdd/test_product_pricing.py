"""BDD tests for product pricing."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/product_pricing.feature")


@when(parsers.cfparse("the product is put on sale at {price:d} down from {was:d}"))
def put_on_sale(product, price, was, error):
    try:
        product.update_details(price=float(price), compare_at_price=float(was), is_sale=True)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the product sells for {price:d}"))
def sells_for(product, price):
    assert product.price == price
    assert product.is_sale is True
