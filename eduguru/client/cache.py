# /eduguru/client/cache.py

import time
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL_SECONDS = 5 * 60


class TTLCache:
    """
    Small key/value cache whose entries expire a fixed time after they were
    stored. Expired entries are dropped lazily, on read.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def _expired(self, key: str) -> bool:
        _, stored_at = self._entries[key]
        if self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return True
        return False

    def get(self, key: str) -> Optional[Any]:
        if key not in self._entries or self._expired(key):
            return None
        return self._entries[key][0]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def invalidate(self, *keys: str) -> None:
        for key in keys:
            self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        # A stored None still counts as cached.
        return key in self._entries and not self._expired(key)
