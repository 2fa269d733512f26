"""In-process caches for verification and decode results."""

from .lru import MIN_CAPACITY, MIN_TTL_MS, Cache, CacheEntry

__all__ = ["Cache", "CacheEntry", "MIN_CAPACITY", "MIN_TTL_MS"]
