"""Process-wide, time-bounded cache shared by request handlers."""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class ListingCache:
    """Key/value store whose entries expire at an absolute deadline.

    ``get``, ``set`` and ``remove`` are each atomic. Nothing spans several
    calls, so a read racing an invalidation may still see the old entry.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key`` or ``None`` when absent/expired."""

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + ttl_seconds, value)

    def remove(self, key: str) -> bool:
        """Drop ``key``; return whether an entry was present."""

        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
