"""Persistent store port for the server cache, with a Redis adapter."""

from abc import ABC, abstractmethod

import redis


class CacheStoreError(Exception):
    """The persistent store could not complete an operation."""


class CacheStore(ABC):
    """Abstract key/value store holding serialized cache entries."""

    @abstractmethod
    def ping(self) -> None:
        """Raise CacheStoreError when the store is unreachable."""
        ...

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def keys(self, prefix: str) -> list[str]:
        """Return every key starting with ``prefix``."""
        ...


class RedisStore(CacheStore):
    """CacheStore backed by a Redis server (``SET key value EX ttl``)."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=5))

    def ping(self) -> None:
        try:
            self.client.ping()
        except redis.RedisError as exc:
            raise CacheStoreError(str(exc)) from exc

    def get(self, key: str) -> str | None:
        try:
            return self.client.get(key)
        except redis.RedisError as exc:
            raise CacheStoreError(str(exc)) from exc

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self.client.set(key, value, ex=ttl_seconds)
        except redis.RedisError as exc:
            raise CacheStoreError(str(exc)) from exc

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as exc:
            raise CacheStoreError(str(exc)) from exc

    def keys(self, prefix: str) -> list[str]:
        try:
            return list(self.client.scan_iter(match=f"{prefix}*"))
        except redis.RedisError as exc:
            raise CacheStoreError(str(exc)) from exc
