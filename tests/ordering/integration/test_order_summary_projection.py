"""Integration tests for the OrderSummary projection."""

from protean.utils.globals import current_domain
from storefront.ordering.order.placement import UpdateOrderStatus
from storefront.ordering.projections.order_summary import OrderSummary, all_orders, orders_for_user


def test_summary_created_on_placement(make_product, place_order):
    order_id = place_order([(make_product(), 2)], user_id="u1")

    summary = current_domain.repository_for(OrderSummary).get(order_id)
    assert summary.status == "pending"
    assert summary.item_count == 2
    assert summary.total == 900.0
    assert summary.customer_name == "Asha Verma"
    assert summary.to_dict()["order_id"] == order_id


def test_summary_follows_status(make_product, place_order):
    order_id = place_order([(make_product(), 1)])

    current_domain.process(UpdateOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

    assert current_domain.repository_for(OrderSummary).get(order_id).status == "cancelled"


def test_orders_for_user_newest_first(make_product, place_order):
    product_id = make_product()
    first = place_order([(product_id, 1)], user_id="u1")
    second = place_order([(product_id, 1)], user_id="u1")
    place_order([(product_id, 1)], user_id="u2")

    assert [s.order_id for s in orders_for_user("u1")] == [second, first]


def test_all_orders_filtered_by_status(make_product, place_order):
    product_id = make_product()
    kept = place_order([(product_id, 1)])
    cancelled = place_order([(product_id, 1)])
    current_domain.process(UpdateOrderStatus(order_id=cancelled, status="cancelled"), asynchronous=False)

    assert {s.order_id for s in all_orders()} == {kept, cancelled}
    assert [s.order_id for s in all_orders("pending")] == [kept]


def test_listings_are_not_capped_at_a_page(make_product, place_order):
    product_id = make_product(stock=500)
    placed = [place_order([(product_id, 1)], user_id="u1") for _ in range(105)]

    assert len(all_orders()) == 105
    assert len(orders_for_user("u1")) == 105
    assert {s.order_id for s in all_orders()} == set(placed)
