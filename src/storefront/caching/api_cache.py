"""Client-side API response cache.

Consumers of the storefront API (the load-test client, scripts, other
services) wrap an ``httpx.AsyncClient`` in an ApiCache. Responses are kept
for ``max_age`` milliseconds, concurrent requests for the same URL share
one in-flight fetch, and entries can optionally be persisted to a JSON file
so a restarted client starts warm.
"""

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import structlog

from storefront.caching.entry import CacheEntry, now_ms

logger = structlog.get_logger(__name__)

DEFAULT_MAX_AGE_MS = 5 * 60 * 1000

HOMEPAGE_URLS = (
    "/api/categories",
    "/api/products/featured",
    "/api/products/trending",
    "/api/products/new",
    "/api/products/sale",
)


class ApiError(Exception):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int):
        super().__init__(f"API error: {status_code}")
        self.status_code = status_code


class ApiCache:
    def __init__(
        self,
        client: httpx.AsyncClient,
        max_age: int = DEFAULT_MAX_AGE_MS,
        storage_path: str | Path | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.client = client
        self.max_age = max_age
        self.storage_path = Path(storage_path) if storage_path else None
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Task] = {}
        self._load()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _load(self) -> None:
        if self.storage_path is None or not self.storage_path.exists():
            return

        try:
            payload = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable API cache file", path=str(self.storage_path), error=str(exc))
            return

        now = self.clock()
        for url, raw in payload.items():
            try:
                entry = CacheEntry(data=raw["data"], timestamp=int(raw["timestamp"]), expiry=int(raw["expiry"]))
            except (KeyError, TypeError, ValueError):
                continue
            if entry.is_valid(now):
                self._entries[url] = entry

    def _persist(self) -> None:
        if self.storage_path is None:
            return

        payload = {
            url: {"data": entry.data, "timestamp": entry.timestamp, "expiry": entry.expiry}
            for url, entry in self._entries.items()
        }
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to persist API cache", path=str(self.storage_path), error=str(exc))

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def cached(self, url: str) -> Any | None:
        """Return the cached payload for ``url`` without fetching."""
        entry = self._entries.get(url)
        if entry is not None and entry.is_valid(self.clock()):
            return entry.data
        return None

    async def get(self, url: str, max_age: int | None = None, **request_kwargs) -> Any:
        """Return JSON for ``url`` from cache, an in-flight fetch, or a new request.

        Raises ApiError when the server answers with a non-2xx status.
        """
        entry = self._entries.get(url)
        if entry is not None and entry.is_valid(self.clock()):
            return entry.data

        task = self._in_flight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetch(url, max_age or self.max_age, request_kwargs))
            self._in_flight[url] = task

        return await asyncio.shield(task)

    async def _fetch(self, url: str, max_age: int, request_kwargs: dict) -> Any:
        try:
            response = await self.client.get(url, **request_kwargs)
            if not response.is_success:
                raise ApiError(response.status_code)

            data = response.json()
            self._entries[url] = CacheEntry(data=data, timestamp=self.clock(), expiry=max_age)
            self._persist()
            return data
        finally:
            self._in_flight.pop(url, None)

    async def prefetch(self, url: str, max_age: int | None = None, **request_kwargs) -> None:
        await self.get(url, max_age, **request_kwargs)

    def clear(self, url: str | None = None) -> None:
        """Forget one URL, or everything when ``url`` is omitted."""
        if url is not None:
            self._entries.pop(url, None)
        else:
            self._entries.clear()
        self._persist()

    def in_flight(self) -> int:
        return len(self._in_flight)

    async def prefetch_homepage_data(self) -> None:
        """Warm every listing the storefront homepage renders."""
        await asyncio.gather(*(self.prefetch(url) for url in HOMEPAGE_URLS))
