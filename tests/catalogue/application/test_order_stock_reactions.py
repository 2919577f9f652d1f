"""Catalogue stock follows placed and cancelled orders."""

import json

from protean.utils.globals import current_domain
from storefront.catalogue.product.product import Product
from storefront.catalogue.stock_alert.management import SubscribeToStock, pending_subscribers
from storefront.ordering.order.placement import PlaceOrder, UpdateOrderStatus

ADDRESS = {
    "first_name": "Priya",
    "last_name": "Sharma",
    "email": "priya@example.com",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
    "country": "India",
}


def _order(product_id, quantity):
    return current_domain.process(
        PlaceOrder(
            items=json.dumps([{"product_id": product_id, "quantity": quantity}]),
            shipping_address=json.dumps(ADDRESS),
            payment_method="cash-on-delivery",
        ),
        asynchronous=False,
    )


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


class TestOrderReservesStock:
    def test_placing_order_reduces_stock(self, women_category, make_product):
        product_id = make_product(stock=5)

        _order(product_id, 2)

        assert _stock(product_id) == 3

    def test_buying_last_units_sells_out(self, women_category, make_product):
        product_id = make_product(stock=2)

        _order(product_id, 2)

        assert _stock(product_id) == 0


class TestCancellationReturnsStock:
    def test_cancelling_order_restocks(self, women_category, make_product):
        product_id = make_product(stock=5)
        order_id = _order(product_id, 2)

        current_domain.process(UpdateOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

        assert _stock(product_id) == 5

    def test_cancelling_sold_out_order_alerts_subscribers(self, women_category, make_product, outbox):
        product_id = make_product(name="Silk Saree", stock=1)
        order_id = _order(product_id, 1)
        current_domain.process(
            SubscribeToStock(email="meera@example.com", product_id=product_id),
            asynchronous=False,
        )

        current_domain.process(UpdateOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

        assert _stock(product_id) == 1
        assert pending_subscribers(product_id) == []
        assert outbox.sent_to("meera@example.com")[0]["subject"] == "Silk Saree Is Now Available!"
