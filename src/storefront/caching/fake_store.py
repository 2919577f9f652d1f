"""Fake cache store: an in-process dictionary standing in for Redis in tests."""

import math

from storefront.caching.store import CacheStore, CacheStoreError


class FakeCacheStore(CacheStore):
    """Records values and TTLs in memory. Can be switched into a failing mode."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.should_fail = False

    def configure(self, should_fail: bool = False):
        """Make every subsequent call raise CacheStoreError (or stop doing so)."""
        self.should_fail = should_fail

    def _check(self):
        if self.should_fail:
            raise CacheStoreError("Connection refused")

    def ping(self) -> None:
        self._check()

    def get(self, key: str) -> str | None:
        self._check()
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self.values[key] = value
        self.ttls[key] = int(math.ceil(ttl_seconds))

    def delete(self, key: str) -> None:
        self._check()
        self.values.pop(key, None)
        self.ttls.pop(key, None)

    def keys(self, prefix: str) -> list[str]:
        self._check()
        return [key for key in self.values if key.startswith(prefix)]
