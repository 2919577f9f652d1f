"""Server cache registry.

Provides singleton access to the process-wide ServerCache. The persistent
tier is Redis when ``REDIS_URL`` is configured; otherwise the cache runs
memory-only.
"""

from storefront.caching.server_cache import ServerCache
from storefront.config import get_settings

_cache_instance: ServerCache | None = None


def get_server_cache() -> ServerCache:
    """Return the configured ServerCache (built on first use)."""
    global _cache_instance
    if _cache_instance is None:
        settings = get_settings()
        store = None
        if settings.redis_url:
            from storefront.caching.store import RedisStore

            store = RedisStore.from_url(settings.redis_url)
        _cache_instance = ServerCache(
            store=store,
            default_ttl=settings.cache_ttl_ms,
            key_prefix=settings.cache_key_prefix,
        )
    return _cache_instance


def set_server_cache(cache: ServerCache) -> None:
    """Replace the ServerCache (useful for testing)."""
    global _cache_instance
    _cache_instance = cache


def reset_server_cache() -> None:
    """Drop the ServerCache singleton so the next call rebuilds it."""
    global _cache_instance
    _cache_instance = None
