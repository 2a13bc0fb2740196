"""Bounded in-process cache with per-entry expiry."""

from infrastructure.cache.keys import CacheKeyBuilder
from infrastructure.cache.ttl_cache import CacheEntry, TTLCache

__all__ = ["CacheEntry", "CacheKeyBuilder", "TTLCache"]
