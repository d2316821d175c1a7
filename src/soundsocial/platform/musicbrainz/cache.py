"""Where: src/soundsocial/platform/musicbrainz/cache.py
What: Thread-safe, size-bounded TTL cache for remote lookup results.
Why: Repeated searches and lookups must not pay the rate-limited round-trip again.

Expiry is lazy: an entry older than the TTL is dropped by the read that finds
it. Capacity is bounded with least-recently-used eviction. ``set(key, None)``
stores a negative entry, which ``get`` reports as a ``CacheEntry`` whose value
is ``None``; ``get`` returns ``None`` only when nothing usable is cached.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Final, Generic, TypeVar

_DEFAULT_TTL_SECONDS: Final[float] = 600.0
_DEFAULT_MAX_ENTRIES: Final[int] = 1024

V = TypeVar("V")


@dataclass(slots=True, frozen=True)
class CacheEntry(Generic[V]):
    """A cached value together with the monotonic time it was stored."""

    value: V
    stored_at: float


class TTLCache(Generic[V]):
    """Key/value store with per-entry expiry and LRU capacity bound."""

    def __init__(
        self,
        ttl_seconds: float = _DEFAULT_TTL_SECONDS,
        max_entries: int = _DEFAULT_MAX_ENTRIES,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._ttl: float = ttl_seconds
        self._max_entries: int = max_entries
        self._clock: Callable[[], float] = clock
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock: Final[threading.Lock] = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> CacheEntry[V] | None:
        """Return the live entry for ``key`` or ``None`` when absent or expired."""

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at > self._ttl:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry

    def set(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``, evicting the oldest entries past capacity."""

        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                _ = self._entries.popitem(last=False)

    def invalidate(self, key: str) -> bool:
        """Drop ``key``; returns True when an entry was removed."""

        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get(key) is not None


__all__ = [
    "CacheEntry",
    "TTLCache",
]
