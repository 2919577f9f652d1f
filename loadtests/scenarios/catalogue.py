"""Catalogue load test scenarios.

BrowsingJourney models an anonymous visitor reading the homepage listings,
a category page, a product and a search. These reads are served by the
server cache, so this is the journey that shows cache hit rates under load.
CatalogueAdminJourney models the back-office adding stock to the catalogue;
every write invalidates the catalogue cache.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_data, product_data, search_term
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState, CatalogueState

HOMEPAGE_LISTINGS = ("featured", "trending", "new", "sale")

ADMIN_EMAIL = os.environ.get("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.environ.get("LOADTEST_ADMIN_PASSWORD", "admin-password")


def sign_in_admin(client) -> bool:
    """Sign the Locust session in as the configured administrator."""
    with client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        catch_response=True,
        name="POST /api/auth/login [admin]",
    ) as resp:
        if resp.status_code == 200:
            return True
        resp.failure(f"Admin login failed: {resp.status_code}: {extract_error_detail(resp)}")
        return False


class BrowsingJourney(SequentialTaskSet):
    """Categories -> Homepage listings -> Category page -> Product -> Search."""

    def on_start(self):
        self.state = CatalogueState()

    @task
    def list_categories(self):
        with self.client.get("/api/categories", catch_response=True, name="GET /api/categories") as resp:
            if resp.status_code == 200:
                self.state.category_names = [c["name"] for c in resp.json()]
            else:
                resp.failure(f"List categories failed: {resp.status_code}")
                self.interrupt()

    @task
    def homepage_listings(self):
        for listing in HOMEPAGE_LISTINGS:
            with self.client.get(
                f"/api/products/{listing}",
                catch_response=True,
                name=f"GET /api/products/{listing}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.product_ids.extend(p["id"] for p in resp.json())
                else:
                    resp.failure(f"{listing} listing failed: {resp.status_code}")

    @task
    def category_page(self):
        if not self.state.category_names:
            return
        name = random.choice(self.state.category_names)
        with self.client.get(
            f"/api/products/category/{name}",
            catch_response=True,
            name="GET /api/products/category/{name}",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids.extend(p["id"] for p in resp.json())
            else:
                resp.failure(f"Category page failed: {resp.status_code}")

    @task
    def product_detail(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.get(
            f"/api/products/{product_id}",
            catch_response=True,
            name="GET /api/products/{id}",
        ) as resp:
            # Products deleted from the back-office answer 404
            if resp.status_code in (200, 404):
                resp.success()
            else:
                resp.failure(f"Product detail failed: {resp.status_code}")

    @task
    def search(self):
        self.client.get(f"/api/search?q={search_term()}", name="GET /api/search")

    @task
    def done(self):
        self.interrupt()


class CatalogueAdminJourney(SequentialTaskSet):
    """Sign in -> Create Category -> Create Product -> Restock -> Edit price.

    Each write fires a catalogue event that clears the cached listings.
    """

    def on_start(self):
        self.state = AdminState()
        if not sign_in_admin(self.client):
            self.interrupt()

    @task
    def create_category(self):
        with self.client.post(
            "/api/admin/categories",
            json=category_data(),
            catch_response=True,
            name="POST /api/admin/categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_name = resp.json()["name"]
            else:
                resp.failure(f"Create category failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_product(self):
        with self.client.post(
            "/api/admin/products",
            json=product_data(self.state.category_name),
            catch_response=True,
            name="POST /api/admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def restock(self):
        with self.client.put(
            f"/api/admin/products/{self.state.product_id}/stock",
            json={"stock": random.randint(10, 100)},
            catch_response=True,
            name="PUT /api/admin/products/{id}/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Restock failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def reprice(self):
        with self.client.put(
            f"/api/admin/products/{self.state.product_id}",
            json={"price": round(random.uniform(49, 4999), 2), "is_sale": False, "clear_compare_at_price": True},
            catch_response=True,
            name="PUT /api/admin/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Catalogue-only load: mostly reads with occasional admin writes."""

    wait_time = between(0.5, 2.0)
    tasks = {BrowsingJourney: 10, CatalogueAdminJourney: 1}
