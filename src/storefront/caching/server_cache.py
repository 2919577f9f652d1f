"""Server-side TTL cache with an in-memory tier and an optional persistent tier.

Reads hit memory first and fall back to the persistent store (Redis in
production). Anything the store returns that is still valid is copied into
memory. Store failures are logged and never surface to callers: the cache
degrades to memory-only behaviour.
"""

import asyncio
import math
from collections.abc import Callable
from typing import Any

import structlog

from storefront.caching.entry import CacheEntry, now_ms
from storefront.caching.store import CacheStore, CacheStoreError

logger = structlog.get_logger(__name__)

DEFAULT_TTL_MS = 10 * 60 * 1000
CLEANUP_INTERVAL_SECONDS = 5 * 60


class ServerCache:
    def __init__(
        self,
        store: CacheStore | None = None,
        default_ttl: int = DEFAULT_TTL_MS,
        key_prefix: str = "storefront:cache:",
        clock: Callable[[], int] = now_ms,
    ):
        self.default_ttl = default_ttl
        self.key_prefix = key_prefix
        self.clock = clock
        self._memory: dict[str, CacheEntry] = {}
        self._store: CacheStore | None = None

        if store is not None:
            try:
                store.ping()
            except CacheStoreError as exc:
                logger.warning("Persistent cache unavailable, using memory only", error=str(exc))
            else:
                self._store = store
                self._load_from_store()

    # -------------------------------------------------------------------
    # Store helpers
    # -------------------------------------------------------------------
    def _store_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _load_from_store(self) -> None:
        """Warm memory from the store, dropping entries that have already expired."""
        try:
            store_keys = self._store.keys(self.key_prefix)
        except CacheStoreError as exc:
            logger.warning("Failed to list persisted cache keys", error=str(exc))
            return

        now = self.clock()
        loaded = 0
        for store_key in store_keys:
            try:
                raw = self._store.get(store_key)
                if raw is None:
                    continue
                entry = CacheEntry.from_json(raw)
                if entry.is_valid(now):
                    self._memory[store_key[len(self.key_prefix) :]] = entry
                    loaded += 1
                else:
                    self._store.delete(store_key)
            except ValueError as exc:
                logger.warning("Invalid persisted cache entry", key=store_key, error=str(exc))
            except CacheStoreError as exc:
                logger.warning("Failed to load persisted cache entry", key=store_key, error=str(exc))

        logger.info("Loaded cached responses from persistent store", count=loaded)

    def is_persistent_available(self) -> bool:
        return self._store is not None

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def get(self, key: str) -> Any | None:
        """Return cached data for ``key``, or None when absent or expired."""
        now = self.clock()
        entry = self._memory.get(key)
        if entry is not None and entry.is_valid(now):
            return entry.data

        if self._store is None:
            return None

        store_key = self._store_key(key)
        try:
            raw = self._store.get(store_key)
            if raw is None:
                return None
            entry = CacheEntry.from_json(raw)
            if entry.is_valid(now):
                self._memory[key] = entry
                return entry.data
            self._store.delete(store_key)
        except ValueError as exc:
            logger.warning("Invalid persisted cache entry", key=key, error=str(exc))
        except CacheStoreError as exc:
            logger.warning("Failed to read from persistent cache", key=key, error=str(exc))

        return None

    def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        """Cache ``data`` under ``key`` for ``ttl`` milliseconds (default TTL when omitted)."""
        ttl = ttl if ttl is not None else self.default_ttl
        entry = CacheEntry(data=data, timestamp=self.clock(), expiry=ttl)
        self._memory[key] = entry

        if self._store is not None:
            try:
                self._store.set(self._store_key(key), entry.to_json(), max(1, math.ceil(ttl / 1000)))
            except CacheStoreError as exc:
                logger.warning("Failed to persist cache entry", key=key, error=str(exc))

    def delete(self, key: str) -> None:
        self._memory.pop(key, None)

        if self._store is not None:
            try:
                self._store.delete(self._store_key(key))
            except CacheStoreError as exc:
                logger.warning("Failed to delete persisted cache entry", key=key, error=str(exc))

    def invalidate_prefix(self, prefix: str) -> int:
        """Delete every entry whose key starts with ``prefix``; returns how many were in memory."""
        doomed = [key for key in self._memory if key.startswith(prefix)]
        for key in doomed:
            del self._memory[key]

        if self._store is not None:
            try:
                for store_key in self._store.keys(self._store_key(prefix)):
                    self._store.delete(store_key)
            except CacheStoreError as exc:
                logger.warning("Failed to invalidate persisted cache entries", prefix=prefix, error=str(exc))

        return len(doomed)

    def clear(self) -> None:
        self._memory.clear()

        if self._store is not None:
            try:
                for store_key in self._store.keys(self.key_prefix):
                    self._store.delete(store_key)
            except CacheStoreError as exc:
                logger.warning("Failed to clear persistent cache", error=str(exc))

    def get_or_set(self, key: str, fetch: Callable[[], Any], ttl: int | None = None) -> Any:
        """Return the cached value, or compute it with ``fetch`` and cache the result."""
        cached = self.get(key)
        if cached is not None:
            return cached

        logger.info("cache-miss", key=key)
        data = fetch()
        if data is not None:
            self.set(key, data, ttl)
        return data

    def cleanup_expired(self) -> int:
        """Evict expired entries from memory and the store. Returns the number removed."""
        now = self.clock()
        removed = 0

        for key in [k for k, entry in self._memory.items() if not entry.is_valid(now)]:
            del self._memory[key]
            removed += 1

        if self._store is not None:
            try:
                store_keys = self._store.keys(self.key_prefix)
            except CacheStoreError as exc:
                logger.warning("Failed to list persisted cache keys", error=str(exc))
                store_keys = []

            for store_key in store_keys:
                try:
                    raw = self._store.get(store_key)
                    if raw is None:
                        continue
                    try:
                        expired = not CacheEntry.from_json(raw).is_valid(now)
                    except ValueError:
                        expired = True
                    if expired:
                        self._store.delete(store_key)
                        removed += 1
                except CacheStoreError as exc:
                    logger.warning("Failed to clean persisted cache entry", key=store_key, error=str(exc))

        if removed:
            logger.info("Cleaned up expired cache entries", count=removed)
        return removed

    def stats(self) -> dict:
        now = self.clock()
        return {
            "entries": sum(1 for entry in self._memory.values() if entry.is_valid(now)),
            "persistent": self.is_persistent_available(),
            "key_prefix": self.key_prefix,
            "default_ttl_ms": self.default_ttl,
        }


async def run_periodic_cleanup(cache: ServerCache, interval: float = CLEANUP_INTERVAL_SECONDS) -> None:
    """Run ``cache.cleanup_expired`` every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        cache.cleanup_expired()
