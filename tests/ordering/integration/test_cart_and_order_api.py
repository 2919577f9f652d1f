"""Integration tests for the cart and order endpoints."""

import pytest


@pytest.fixture()
def tetra(make_product):
    return make_product(stock=10)


def _checkout_body(address, **extra):
    return {"shipping_address": address, "payment_method": "cash-on-delivery", **extra}


class TestGuestCart:
    def test_empty_cart(self, client):
        response = client.get("/api/cart")
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total"] == 0

    def test_cart_survives_between_requests(self, client, tetra):
        client.post("/api/cart/items", json={"product_id": tetra, "quantity": 2})

        cart = client.get("/api/cart").json()
        assert cart["count"] == 2
        assert cart["total"] == 900.0

    def test_separate_browsers_get_separate_carts(self, client, shopper_client, tetra):
        client.post("/api/cart/items", json={"product_id": tetra, "quantity": 2})
        assert shopper_client.get("/api/cart").json()["items"] == []

    def test_change_and_remove_lines(self, client, tetra):
        client.post("/api/cart/items", json={"product_id": tetra})

        assert client.patch(f"/api/cart/items/{tetra}", json={"quantity": 5}).json()["count"] == 5
        assert client.delete(f"/api/cart/items/{tetra}").json()["items"] == []

    def test_clear(self, client, tetra):
        client.post("/api/cart/items", json={"product_id": tetra})
        assert client.delete("/api/cart").json()["count"] == 0

    def test_too_many_is_a_bad_request(self, client, tetra):
        response = client.post("/api/cart/items", json={"product_id": tetra, "quantity": 11})
        assert response.status_code == 400

    def test_unknown_product(self, client):
        response = client.post("/api/cart/items", json={"product_id": "missing"})
        assert response.status_code == 404

    def test_guest_checkout(self, client, tetra, address):
        client.post("/api/cart/items", json={"product_id": tetra, "quantity": 2})

        response = client.post("/api/cart/checkout", json=_checkout_body(address))

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"
        assert order["user_id"] is None
        assert order["total"] == 900.0
        assert client.get("/api/cart").json()["items"] == []

    def test_checkout_empty_cart(self, client, address):
        assert client.post("/api/cart/checkout", json=_checkout_body(address)).status_code == 400


class TestCartMergeOnLogin:
    def test_guest_cart_follows_shopper_after_login(self, client, tetra):
        client.post("/api/auth/signup", json={"email": "ravi@example.com", "password": "ravi-pw-1", "full_name": "Ravi K"})
        client.post("/api/auth/logout")

        client.post("/api/cart/items", json={"product_id": tetra, "quantity": 2})
        client.post("/api/auth/login", json={"email": "ravi@example.com", "password": "ravi-pw-1"})

        cart = client.get("/api/cart").json()
        assert cart["count"] == 2


class TestOrders:
    def test_place_order_directly(self, client, tetra, address):
        response = client.post(
            "/api/orders",
            json={"items": [{"product_id": tetra, "quantity": 3}], **_checkout_body(address)},
        )
        assert response.status_code == 201
        assert response.json()["total"] == 1350.0

    def test_order_needs_items(self, client, address):
        response = client.post("/api/orders", json={"items": [], **_checkout_body(address)})
        assert response.status_code == 422

    def test_guest_order_readable_by_id(self, client, tetra, address):
        order = client.post("/api/orders", json={"items": [{"product_id": tetra}], **_checkout_body(address)}).json()

        response = client.get(f"/api/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == order["id"]

    def test_missing_order(self, client):
        assert client.get("/api/orders/missing").status_code == 404

    def test_my_orders(self, shopper_client, tetra, address):
        shopper_client.post("/api/orders", json={"items": [{"product_id": tetra}], **_checkout_body(address)})

        orders = shopper_client.get("/api/my-orders").json()
        assert len(orders) == 1
        assert orders[0]["status"] == "pending"

    def test_my_orders_requires_login(self, client):
        assert client.get("/api/my-orders").status_code == 401

    def test_other_shoppers_order_is_forbidden(self, shopper_client, client, tetra, address):
        order = shopper_client.post(
            "/api/orders", json={"items": [{"product_id": tetra}], **_checkout_body(address)}
        ).json()
        client.post("/api/auth/signup", json={"email": "ravi@example.com", "password": "ravi-pw-1", "full_name": "Ravi K"})

        assert client.get(f"/api/orders/{order['id']}").status_code == 403

    def test_admin_can_read_any_order(self, shopper_client, admin_client, tetra, address):
        order = shopper_client.post(
            "/api/orders", json={"items": [{"product_id": tetra}], **_checkout_body(address)}
        ).json()

        assert admin_client.get(f"/api/orders/{order['id']}").status_code == 200

    def test_user_orders_for_someone_else(self, shopper_client):
        assert shopper_client.get("/api/users/someone-else/orders").status_code == 403
