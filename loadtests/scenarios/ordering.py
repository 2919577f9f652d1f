"""Cart and order load test scenarios.

CartToCheckoutJourney converts a guest cart into an order through the
session cookie Locust keeps per user. DirectOrderJourney places an order
in one request. OrderFulfilmentJourney is the back-office moving pending
orders along the status workflow.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, order_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState, CartState, OrderState
from loadtests.scenarios.catalogue import sign_in_admin

NEXT_STATUS = {"pending": "processing", "processing": "shipped", "shipped": "delivered"}


def in_stock_product_ids(client) -> list[str]:
    with client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code}")
            return []
        return [p["id"] for p in resp.json() if p.get("stock", 0) > 0]


class CartToCheckoutJourney(SequentialTaskSet):
    """Browse -> Add Items -> Update Quantity -> Remove Item -> Checkout -> View Order."""

    def on_start(self):
        self.state = CartState()
        self.order = OrderState()

    @task
    def browse(self):
        self.state.product_ids = in_stock_product_ids(self.client)
        if len(self.state.product_ids) < 2:
            self.interrupt()

    @task
    def add_items(self):
        for product_id in random.sample(self.state.product_ids, k=min(3, len(self.state.product_ids))):
            with self.client.post(
                "/api/cart/items",
                json={"product_id": product_id, "quantity": 1},
                catch_response=True,
                name="POST /api/cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.item_count = resp.json()["count"]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        with self.client.get("/api/cart", catch_response=True, name="GET /api/cart") as resp:
            items = resp.json()["items"] if resp.status_code == 200 else []
        if not items:
            self.interrupt()
        self.client.patch(
            f"/api/cart/items/{items[0]['product_id']}",
            json={"quantity": 2},
            name="PATCH /api/cart/items/{product_id}",
        )
        if len(items) > 2:
            self.client.delete(
                f"/api/cart/items/{items[-1]['product_id']}",
                name="DELETE /api/cart/items/{product_id}",
            )

    @task
    def checkout(self):
        with self.client.post(
            "/api/cart/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /api/cart/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.order.order_id = resp.json()["id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_order(self):
        with self.client.get(
            f"/api/orders/{self.order.order_id}",
            catch_response=True,
            name="GET /api/orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View order failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class DirectOrderJourney(SequentialTaskSet):
    """Browse -> Place Order (no cart)."""

    @task
    def place_order(self):
        product_ids = in_stock_product_ids(self.client)
        if not product_ids:
            self.interrupt()
        with self.client.post(
            "/api/orders",
            json=order_data(product_ids),
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            # Another user may have bought the last unit between browse and order
            if resp.status_code in (201, 400):
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderFulfilmentJourney(SequentialTaskSet):
    """Sign in -> List pending orders -> Advance each one step."""

    def on_start(self):
        self.state = AdminState()
        self.orders = []
        if not sign_in_admin(self.client):
            self.interrupt()

    @task
    def list_orders(self):
        with self.client.get(
            "/api/admin/orders",
            catch_response=True,
            name="GET /api/admin/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}")
                self.interrupt()
            self.orders = [o for o in resp.json() if o["status"] in NEXT_STATUS][:5]

    @task
    def advance_orders(self):
        for order in self.orders:
            with self.client.patch(
                f"/api/admin/orders/{order['order_id']}/status",
                json={"status": NEXT_STATUS[order["status"]]},
                catch_response=True,
                name="PATCH /api/admin/orders/{id}/status",
            ) as resp:
                if resp.status_code == 200:
                    self.state.order_ids.append(order["order_id"])
                elif resp.status_code == 400:
                    resp.success()
                else:
                    resp.failure(f"Status update failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    wait_time = between(1.0, 4.0)
    tasks = {CartToCheckoutJourney: 4, DirectOrderJourney: 2, OrderFulfilmentJourney: 1}
