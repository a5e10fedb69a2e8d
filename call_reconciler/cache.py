"""Time-based cache for per-organization snapshot derivatives."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    value: T
    expires_at: float


class SnapshotCache(Generic[T]):
    """Values keyed by organization id that expire ``ttl_seconds`` after being stored."""

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, _Entry[T]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, org_id: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(org_id)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[org_id]
                LOGGER.debug("Cache entry for %s expired", org_id)
                return None
            return entry.value

    def put(self, org_id: str, value: T) -> None:
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
            for key in expired:
                del self._entries[key]
            self._entries[org_id] = _Entry(value=value, expires_at=now + self._ttl)

    def get_or_load(self, org_id: str, loader: Callable[[], T]) -> T:
        """Return the cached value, calling *loader* and storing its result on a miss.

        The loader runs outside the lock; exceptions propagate and nothing is cached.
        """

        cached = self.get(org_id)
        if cached is not None:
            return cached
        value = loader()
        self.put(org_id, value)
        return value

    def invalidate(self, org_id: Optional[str] = None) -> None:
        with self._lock:
            if org_id is None:
                self._entries.clear()
            else:
                self._entries.pop(org_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["SnapshotCache"]
