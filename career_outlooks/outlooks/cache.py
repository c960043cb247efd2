"""In-process TTL cache injected into outlook providers."""

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


MISSING = object()


class TTLCache:
    """Thread-safe key/value cache whose entries expire after a fixed TTL.

    Expired entries are dropped lazily on access.

    Args:
        ttl_seconds: Lifetime of each entry in seconds
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: Optional[Any] = None) -> Optional[Any]:
        """Return the cached value, or default if absent or expired.

        Stored values may themselves be None; pass ``default=MISSING`` to tell
        a cached None apart from a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return default
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store a value, resetting its expiry."""
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def has(self, key: Hashable) -> bool:
        return self.get(key, MISSING) is not MISSING

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)
