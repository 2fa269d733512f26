"""Bounded in-memory cache with per-entry TTL and access-weighted eviction."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from ..utils.time import now_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_CAPACITY = 1000
MIN_TTL_MS = 1


@dataclass
class CacheEntry(Generic[T]):
    """One cached value with its lifetime and hit counter."""

    data: T
    created_at: float
    expires_at: float
    access_count: int = 1

    def expired(self, now: float) -> bool:
        return now > self.expires_at


class Cache(Generic[T]):
    """Fixed-capacity key/value store keyed by raw token string.

    Expired entries are removed lazily when touched; there is no sweeper.
    When a new key arrives at capacity one entry is evicted, choosing the
    lowest ``access_count + age_seconds`` score. Capacity is never below
    1000 and TTLs never below 1ms.
    """

    def __init__(
        self,
        max_size: int = MIN_CAPACITY,
        default_ttl_ms: Optional[float] = None,
        *,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.max_size = max(MIN_CAPACITY, int(max_size))
        self.default_ttl_ms = max(MIN_TTL_MS, default_ttl_ms or 0)
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or ``None`` when missing or expired."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            entry.access_count += 1
            return entry.data

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return False
            entry.access_count += 1
            return True

    def set(self, key: str, value: T, ttl_ms: Optional[float] = None) -> None:
        """Store ``value``; a zero or negative TTL still lives for 1ms."""
        with self._lock:
            now = self._clock()
            requested = self.default_ttl_ms if ttl_ms is None else ttl_ms
            ttl = max(MIN_TTL_MS, requested)
            if key not in self._entries and len(self._entries) >= self.max_size:
                self._evict_one(now)
            self._entries[key] = CacheEntry(data=value, created_at=now, expires_at=now + ttl)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entry(self, key: str) -> Optional[CacheEntry[T]]:
        """Peek at the raw entry without touching its access count or expiry."""
        with self._lock:
            return self._entries.get(key)

    def _live_entry(self, key: str) -> Optional[CacheEntry[T]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    def _evict_one(self, now: float) -> None:
        victim: Optional[str] = None
        lowest = float("inf")
        for key, entry in self._entries.items():
            score = entry.access_count + (now - entry.created_at) / 1000
            if score < lowest:
                lowest = score
                victim = key
        if victim is not None:
            del self._entries[victim]
            logger.debug("Cache evicted one entry (score=%.3f, size=%d)", lowest, len(self._entries))
