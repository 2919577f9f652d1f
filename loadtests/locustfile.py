"""Storefront Load Testing: Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection or use --tags.

Back-office journeys sign in with LOADTEST_ADMIN_EMAIL and
LOADTEST_ADMIN_PASSWORD; create that account first through
``POST /api/auth/create-first-admin``.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Mixed workload only:
    locust -f loadtests/locustfile.py MixedWorkloadUser

    # Cache stress test:
    locust -f loadtests/locustfile.py CacheFloodUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import asyncio
import logging
import time

import httpx
import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.catalogue import CatalogueUser  # noqa: F401
from loadtests.scenarios.identity import IdentityUser  # noqa: F401
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.ordering import OrderingUser  # noqa: F401
from loadtests.scenarios.stress import CacheFloodUser, SpikeUser  # noqa: F401
from storefront.caching.api_cache import ApiCache, ApiError

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "items: Only 2 of Neon Tetra
    left in stock" instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


async def _warm_homepage(host: str) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=10) as client:
        await ApiCache(client).prefetch_homepage_data()


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Warm the server cache so the first wave of users measures cache hits."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            asyncio.run(_warm_homepage(environment.host))
            print("[LOADTEST] Homepage listings prefetched")
        except (ApiError, httpx.HTTPError) as e:
            print(f"[LOADTEST] Could not prefetch homepage listings: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Report whether the persistent cache tier stayed up for the run."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return
    try:
        resp = requests.get(f"{environment.host}/health", timeout=5)
        print(f"[LOADTEST] Health: {resp.json()}\n")
    except (requests.RequestException, ValueError) as e:
        print(f"[LOADTEST] Could not fetch health status: {e}\n")
