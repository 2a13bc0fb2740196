"""TTL cache with oldest-expiry-first eviction.

The cache is local to a single process. Instances are constructed
explicitly and injected into the components that need them, so each
process and each test owns isolated state.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import structlog

logger = structlog.get_logger()

_MISSING = object()


@dataclass
class CacheEntry:
    """A cached value and the absolute time after which it is stale."""

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class TTLCache:
    """Bounded key/value store with lazy per-entry expiry.

    When the store is full and a new key is set, the single entry with the
    smallest ``expires_at`` is evicted. Each individual operation holds the
    internal lock; ``get_or_compute`` does not hold it across the producer
    call, so concurrent misses on one key may both run the producer. A load
    that overlaps an invalidation of its key is returned to the caller but
    not stored.

    Args:
        max_items: Maximum number of entries held at once.
        default_ttl_seconds: TTL applied when ``set`` is called without one.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        max_items: int = 1000,
        default_ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_items < 1:
            raise ValueError("max_items must be >= 1")
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be > 0")
        self._max_items = max_items
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        # Invalidation counters, kept only for keys with a load in flight.
        self._loading: Dict[str, int] = {}
        self._generations: Dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self.log = logger.bind(component="ttl_cache")

    @property
    def max_items(self) -> int:
        return self._max_items

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if missing or expired.

        An expired entry is removed before returning.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return default
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._misses += 1
                return default
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store ``value`` under ``key``; overwriting resets the expiry."""
        ttl = self._resolve_ttl(ttl_seconds)
        with self._lock:
            self._store(key, value, ttl)

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if an entry was present."""
        with self._lock:
            self._bump_generation(key)
            return self._entries.pop(key, None) is not None

    def invalidate(self, key: str) -> int:
        """Remove ``key`` and return the number of entries removed (0 or 1)."""
        return 1 if self.delete(key) else 0

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with ``prefix``."""
        with self._lock:
            for key in self._generations:
                if key.startswith(prefix):
                    self._generations[key] += 1
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        if doomed:
            self.log.debug("cache_prefix_invalidated", prefix=prefix, count=len(doomed))
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def keys(self) -> List[str]:
        """Sweep expired entries and return a snapshot of the live keys."""
        with self._lock:
            self._sweep(self._clock())
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "max_items": self._max_items,
                "default_ttl_seconds": self._default_ttl,
            }

    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        """Return the cached value for ``key`` or compute and store it.

        Failures raised by ``producer`` propagate and nothing is stored. A
        ``None`` result is returned but not cached. If the cache itself
        fails, the producer's result is still returned.

        Args:
            key: Cache key.
            producer: Zero-argument coroutine function computing the value.
            ttl_seconds: TTL for the stored value; defaults to the cache TTL.
        """
        try:
            cached = self.get(key, _MISSING)
        except Exception as e:
            self.log.warning("cache_read_failed", key=key, error=str(e))
            return await producer()

        if cached is not _MISSING:
            return cached

        self.log.debug("cache_miss", key=key)
        token = self._begin_load(key)
        value = None
        try:
            value = await producer()
        finally:
            self._end_load(key, token, value, ttl_seconds)
        return value

    def _resolve_ttl(self, ttl_seconds: Optional[float]) -> float:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError("ttl_seconds must be > 0")
        return ttl

    def _store(self, key: str, value: Any, ttl: float) -> None:
        now = self._clock()
        if key not in self._entries and len(self._entries) >= self._max_items:
            self._evict_earliest_expiry()
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=now + ttl)

    def _bump_generation(self, key: str) -> None:
        if key in self._generations:
            self._generations[key] += 1

    def _begin_load(self, key: str) -> Tuple[int, int]:
        with self._lock:
            self._loading[key] = self._loading.get(key, 0) + 1
            generation = self._generations.setdefault(key, 0)
            return generation, self._epoch

    def _end_load(
        self,
        key: str,
        token: Tuple[int, int],
        value: Any,
        ttl_seconds: Optional[float],
    ) -> None:
        """Release the load slot and store ``value`` unless the key was invalidated.

        Never raises; a failed store is logged and the value is left uncached.
        """
        with self._lock:
            current = (self._generations[key], self._epoch) == token
            remaining = self._loading[key] - 1
            if remaining:
                self._loading[key] = remaining
            else:
                del self._loading[key]
                del self._generations[key]

            if value is None:
                return
            if not current:
                self.log.debug("cache_stale_load_discarded", key=key)
                return
            try:
                self._store(key, value, self._resolve_ttl(ttl_seconds))
            except Exception as e:
                self.log.warning("cache_write_failed", key=key, error=str(e))

    def _evict_earliest_expiry(self) -> None:
        victim = min(self._entries.values(), key=lambda entry: entry.expires_at)
        del self._entries[victim.key]
        self._evictions += 1
        self.log.debug("cache_entry_evicted", key=victim.key)

    def _sweep(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
