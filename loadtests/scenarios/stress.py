"""Stress test scenarios for the catalogue cache.

CacheFloodUser hammers the cached homepage listings while occasionally
forcing a cache invalidation, so every cycle measures both the hit path
and the rebuild that follows. SpikeUser simulates a sudden burst of
signups.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import search_term, signup_data
from loadtests.scenarios.catalogue import HOMEPAGE_LISTINGS, sign_in_admin


class CacheFloodUser(HttpUser):
    """Stress test: cached read throughput with periodic invalidation.

    Target: the in-memory tier should serve nearly every request.
    Monitor: the ``cache-miss`` log lines should cluster right after
    each invalidation, then stop.
    """

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    def on_start(self):
        self.is_admin = sign_in_admin(self.client)

    @task(10)
    def homepage(self):
        for listing in HOMEPAGE_LISTINGS:
            self.client.get(f"/api/products/{listing}", name=f"[STRESS] GET /api/products/{listing}")

    @task(4)
    def categories(self):
        self.client.get("/api/categories", name="[STRESS] GET /api/categories")

    @task(4)
    def search(self):
        self.client.get(f"/api/search?q={search_term()}", name="[STRESS] GET /api/search")

    @task(1)
    def invalidate(self):
        """Clears the server cache; the next reads rebuild it."""
        if self.is_admin:
            self.client.delete("/api/admin/cache", name="[STRESS] DELETE /api/admin/cache")


class SpikeUser(HttpUser):
    """Spike test: rapid-fire signups.

    Use with a high user count and instant spawn rate to simulate a
    sudden traffic burst. Every signup pays a bcrypt hash.
    """

    wait_time = constant_pacing(0.05)  # ~20 req/sec per user

    @task
    def rapid_signup(self):
        self.client.post("/api/auth/signup", json=signup_data(), name="[SPIKE] POST /api/auth/signup")
