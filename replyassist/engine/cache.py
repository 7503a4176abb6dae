"""TTL cache for remote ranking outcomes."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    stored_at: float
    value: T


class TTLCache(Generic[T]):
    """Mapping whose entries expire ``ttl_sec`` after they were stored.

    Reads and writes are guarded by a lock so concurrent requests can share
    one instance. Expired entries are evicted lazily on access and on write.
    """

    def __init__(
        self,
        ttl_sec: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 1024,
    ) -> None:
        self.ttl_sec = ttl_sec
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[Hashable, _Entry[T]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[T]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if now - entry.stored_at >= self.ttl_sec:
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return entry.value

    def set(self, key: Hashable, value: T) -> None:
        now = self._clock()
        with self._lock:
            if len(self._entries) >= self.max_entries:
                self._evict(now)
            self._entries[key] = _Entry(now, value)

    def _evict(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if now - e.stored_at >= self.ttl_sec]
        for k in expired:
            del self._entries[k]
        # still full: drop the oldest insertions
        overflow = len(self._entries) - self.max_entries + 1
        for k in list(self._entries)[:max(0, overflow)]:
            del self._entries[k]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
