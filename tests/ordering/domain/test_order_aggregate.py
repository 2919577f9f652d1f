"""Domain tests for the Order aggregate and its status machine."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.ordering.order.order import Address, Order, OrderStatus

ITEMS = [
    {"product_id": "p1", "name": "Neon Tetra", "price": 450.0, "quantity": 2},
    {"product_id": "p2", "name": "Java Fern", "price": 199.5, "quantity": 1},
]


@pytest.fixture()
def shipping(address):
    return Address(**address)


@pytest.fixture()
def order(shipping):
    order = Order.place(items=ITEMS, shipping_address=shipping, payment_method="credit-card", user_id="u1")
    order._events.clear()
    return order


class TestPlace:
    def test_starts_pending_with_recomputed_total(self, shipping):
        order = Order.place(items=ITEMS, shipping_address=shipping, payment_method="paypal")

        assert order.status == OrderStatus.PENDING.value
        assert order.total == 1099.5
        assert order.item_count == 3
        assert order.user_id is None

    def test_billing_defaults_to_shipping(self, shipping):
        order = Order.place(items=ITEMS, shipping_address=shipping, payment_method="paypal")
        assert order.billing_address == shipping

    def test_raises_order_placed(self, shipping):
        order = Order.place(items=ITEMS, shipping_address=shipping, payment_method="paypal", user_id="u1")

        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.customer_name == "Asha Verma"
        assert event.customer_email == "asha@example.com"
        assert event.total == 1099.5
        assert [i["product_id"] for i in json.loads(event.items)] == ["p1", "p2"]

    def test_needs_items(self, shipping):
        with pytest.raises(ValidationError):
            Order.place(items=[], shipping_address=shipping, payment_method="paypal")

    def test_unknown_payment_method(self, shipping):
        with pytest.raises(ValidationError):
            Order.place(items=ITEMS, shipping_address=shipping, payment_method="barter")

    def test_belongs_to(self, order):
        assert order.belongs_to("u1")
        assert not order.belongs_to("u2")


class TestStatusMachine:
    @pytest.mark.parametrize(
        "path",
        [
            ["processing"],
            ["processing", "shipped"],
            ["processing", "shipped", "delivered"],
            ["cancelled"],
            ["processing", "cancelled"],
        ],
    )
    def test_allowed_paths(self, order, path):
        for status in path:
            order.change_status(status)
        assert order.status == path[-1]

    @pytest.mark.parametrize(
        "path",
        [
            ["shipped"],
            ["delivered"],
            ["pending"],
            ["processing", "shipped", "cancelled"],
            ["cancelled", "processing"],
            ["processing", "shipped", "delivered", "cancelled"],
        ],
    )
    def test_disallowed_paths(self, order, path):
        with pytest.raises(ValidationError):
            for status in path:
                order.change_status(status)

    def test_unknown_status(self, order):
        with pytest.raises(ValidationError) as exc:
            order.change_status("lost")
        assert "status" in exc.value.messages

    def test_status_change_event(self, order):
        order.change_status("processing", note="Packed")

        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "processing"
        assert event.note == "Packed"
        assert event.customer_email == "asha@example.com"
        assert order.status_note == "Packed"

    def test_cancelling_releases_items(self, order):
        order.change_status("cancelled", note="Changed my mind")

        cancelled = [e for e in order._events if isinstance(e, OrderCancelled)]
        assert len(cancelled) == 1
        assert cancelled[0].reason == "Changed my mind"
        assert sum(i["quantity"] for i in json.loads(cancelled[0].items)) == 3


def test_detail_shape(order):
    detail = order.to_dict_detail()
    assert detail["status"] == "pending"
    assert detail["total"] == 1099.5
    assert detail["shipping_address"]["city"] == "Bengaluru"
    assert detail["billing_address"] == detail["shipping_address"]
    assert len(detail["items"]) == 2
