"""Cache entry shared by the server and client caches."""

import json
import time
from dataclasses import asdict, dataclass
from typing import Any


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass
class CacheEntry:
    """A cached payload stamped with when it was stored and how long it lives.

    ``timestamp`` and ``expiry`` are both milliseconds. An entry is valid
    while ``now - timestamp < expiry``.
    """

    data: Any
    timestamp: int
    expiry: int

    def is_valid(self, now: int) -> bool:
        return now - self.timestamp < self.expiry

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry":
        """Decode a serialized entry.

        Raises ValueError for malformed JSON or missing keys.
        """
        payload = json.loads(raw)
        try:
            return cls(
                data=payload["data"],
                timestamp=int(payload["timestamp"]),
                expiry=int(payload["expiry"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed cache entry: {exc}") from exc
