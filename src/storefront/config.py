"""Application settings read from the environment.

Protean's own configuration (databases, brokers, event store) lives in
``domain.toml``. These are the knobs the web layer, the caches and the
email channel need.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    store_name: str = "Aquatic Store"
    session_secret: str = "storefront-dev-secret"
    session_max_age: int = 7 * 24 * 60 * 60
    sendgrid_api_key: str | None = None
    from_email: str = "notifications@yourdomain.com"
    admin_email: str = "admin@example.com"
    redis_url: str | None = None
    cache_ttl_ms: int = 10 * 60 * 1000
    cache_key_prefix: str = "storefront:cache:"
    bcrypt_rounds: int = 10
    low_stock_threshold: int = 5
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            store_name=os.getenv("STORE_NAME", cls.store_name),
            session_secret=os.getenv("SESSION_SECRET", cls.session_secret),
            session_max_age=_env_int("SESSION_MAX_AGE", cls.session_max_age),
            sendgrid_api_key=os.getenv("SENDGRID_API_KEY") or None,
            from_email=os.getenv("FROM_EMAIL", cls.from_email),
            admin_email=os.getenv("ADMIN_EMAIL", cls.admin_email),
            redis_url=os.getenv("REDIS_URL") or None,
            cache_ttl_ms=_env_int("CACHE_TTL_MS", cls.cache_ttl_ms),
            cache_key_prefix=os.getenv("CACHE_KEY_PREFIX", cls.cache_key_prefix),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", cls.bcrypt_rounds),
            low_stock_threshold=_env_int("LOW_STOCK_THRESHOLD", cls.low_stock_threshold),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings.from_env()
