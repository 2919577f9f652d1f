"""Integration tests for the public catalogue endpoints."""

import pytest

PRODUCT = {
    "name": "Neon Tetra (pack of 10)",
    "description": "Peaceful schooling fish for community tanks.",
    "price": 450,
    "image_url": "https://cdn.example.com/neon-tetra.jpg",
    "category": "Fish",
    "tags": ["freshwater", "schooling"],
    "stock": 25,
    "is_featured": True,
}


@pytest.fixture()
def stocked(admin_client):
    admin_client.post("/api/categories", json={"name": "Fish", "image_url": "https://cdn.example.com/fish.jpg"})
    response = admin_client.post("/api/products", json=PRODUCT)
    assert response.status_code == 201
    return response.json()


class TestProductEndpoints:
    def test_create_product_returns_listing(self, stocked):
        assert stocked["name"] == "Neon Tetra (pack of 10)"
        assert stocked["tags"] == ["freshwater", "schooling"]
        assert stocked["in_stock"] is True

    def test_create_product_requires_admin(self, client):
        response = client.post("/api/products", json=PRODUCT)
        assert response.status_code == 401

    def test_shopper_cannot_create_product(self, shopper_client):
        response = shopper_client.post("/api/products", json=PRODUCT)
        assert response.status_code == 403

    def test_unknown_category_is_a_bad_request(self, admin_client):
        response = admin_client.post("/api/products", json=PRODUCT)
        assert response.status_code == 400

    def test_list_and_featured(self, stocked, client):
        assert [p["id"] for p in client.get("/api/products").json()] == [stocked["id"]]
        assert [p["id"] for p in client.get("/api/products/featured").json()] == [stocked["id"]]
        assert client.get("/api/products/sale").json() == []

    def test_products_in_category(self, stocked, client):
        assert len(client.get("/api/products/category/fish").json()) == 1
        assert client.get("/api/products/category/plants").json() == []

    def test_get_product(self, stocked, client):
        response = client.get(f"/api/products/{stocked['id']}")
        assert response.status_code == 200
        assert response.json()["price"] == 450

    def test_get_missing_product(self, client):
        response = client.get("/api/products/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"


class TestSearchEndpoint:
    def test_search_by_tag(self, stocked, client):
        response = client.get("/api/search", params={"q": "freshwater"})
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [stocked["id"]]

    def test_search_requires_query(self, client):
        assert client.get("/api/search").status_code == 400


class TestCategoryEndpoints:
    def test_list_categories(self, stocked, client):
        categories = client.get("/api/categories").json()
        assert [c["slug"] for c in categories] == ["fish"]

    def test_get_by_slug(self, stocked, client):
        assert client.get("/api/categories/fish").json()["name"] == "Fish"
        assert client.get("/api/categories/plants").status_code == 404

    def test_duplicate_category_rejected(self, stocked, admin_client):
        response = admin_client.post("/api/categories", json={"name": "fish"})
        assert response.status_code == 400


class TestStockAlertEndpoints:
    def test_subscribe_and_notify(self, stocked, admin_client, outbox):
        response = admin_client.post(
            "/api/stock-notifications/subscribe",
            json={"email": "meera@example.com", "product_id": stocked["id"]},
        )
        assert response.status_code == 201
        assert response.json()["subscription_id"]

        response = admin_client.post("/api/stock-notifications/notify", json={"product_id": stocked["id"]})
        assert response.json() == {"notified": 1, "message": "Notified 1 subscribers"}
        assert len(outbox.sent_to("meera@example.com")) == 1

    def test_subscribe_to_unknown_product(self, client):
        response = client.post(
            "/api/stock-notifications/subscribe",
            json={"email": "meera@example.com", "product_id": "nope"},
        )
        assert response.status_code == 404

    def test_notify_requires_admin(self, stocked, shopper_client):
        response = shopper_client.post("/api/stock-notifications/notify", json={"product_id": stocked["id"]})
        assert response.status_code == 403
