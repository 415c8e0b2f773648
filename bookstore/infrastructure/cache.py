"""
Read-through cache for assembled catalog views.

Keeps author/store lists and book/store detail views in process memory with a
fixed time-to-live. Writers evict the affected keys synchronously after their
transaction commits; the TTL only bounds staleness for keys whose eviction
path was missed (or for writes made by another process).
"""

import logging
import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Set, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class ReadThroughCache:
    """
    Thread-safe TTL cache with read-through helper.

    Concurrent misses on the same key may both compute the value; the last
    writer wins. There is no single-flight guarantee.
    A computation whose key is invalidated before it finishes is never
    stored, so a value read before a write cannot outlive that write's eviction.

    Attributes:
        ttl_seconds: Lifetime of every entry
        max_entries: Upper bound on stored entries (LRU-ish eviction beyond it)
        hits: Number of cache hits
        misses: Number of cache misses
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_entries: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Time-to-live per entry (default: 5 minutes)
            max_entries: Maximum number of stored entries
            timer: Clock used for expiry; injectable for tests
        """
        self._entries: TTLCache = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer,
        )
        self._lock = threading.Lock()
        # key -> tokens of computations started since the key was last evicted
        self._inflight: Dict[str, Set[object]] = {}
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0

        logger.info(
            f"Initialized ReadThroughCache with ttl={ttl_seconds}s max_entries={max_entries}"
        )

    def get(self, key: str) -> Optional[Any]:
        """
        Return the cached value, or None when absent or expired.
        """
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is _MISSING:
                self.misses += 1
                logger.debug(f"Cache MISS: {key}")
                return None
            self.hits += 1
        logger.debug(f"Cache HIT: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
        logger.debug(f"Cached: {key} (TTL: {self.ttl_seconds}s)")

    def invalidate(self, *keys: str) -> None:
        """
        Evict keys. Missing keys are ignored.

        Args:
            keys: Cache keys to evict
        """
        with self._lock:
            for key in keys:
                self._entries.pop(key, None)
                self._inflight.pop(key, None)
        logger.debug(f"Evicted from cache: {', '.join(keys)}")

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._inflight.clear()
        logger.info(f"Cleared {count} items from cache")

    async def get_or_compute(
        self, key: str, compute: Callable[[], Awaitable[Optional[T]]],
    ) -> Optional[T]:
        """
        Return the cached value for key, computing and storing it on a miss.

        A computed None (entity not found) is returned but not stored. A value
        whose key was invalidated while it was being computed is returned but
        not stored either, so a pre-write view never outlives the eviction.

        Args:
            key: Cache key
            compute: Coroutine function producing the value from storage

        Returns:
            Cached or freshly computed value
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        token = object()
        with self._lock:
            self._inflight.setdefault(key, set()).add(token)
        value = None
        try:
            # Lock is not held across the await: a concurrent miss may compute too.
            value = await compute()
        finally:
            self._finish(key, token, value)
        return value

    def _finish(self, key: str, token: object, value: Any) -> None:
        """Retire a computation; store its value only if the key was not evicted meanwhile."""
        with self._lock:
            tokens = self._inflight.get(key)
            if tokens is None or token not in tokens:
                logger.debug(f"Discarded stale computation: {key}")
                return
            tokens.discard(token)
            if not tokens:
                del self._inflight[key]
            if value is not None:
                self._entries[key] = value

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            size = len(self._entries)
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0
        return {
            "size": size,
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "total_requests": total_requests,
            "hit_rate_percent": int(round(hit_rate)),
        }


# Singleton (initialized on startup)
catalog_cache: Optional[ReadThroughCache] = None


def init_cache(ttl_seconds: float = 300, max_entries: int = 1024) -> ReadThroughCache:
    global catalog_cache
    catalog_cache = ReadThroughCache(ttl_seconds=ttl_seconds, max_entries=max_entries)
    return catalog_cache


def get_cache() -> ReadThroughCache:
    """FastAPI dependency for the process-wide cache."""
    if catalog_cache is None:
        raise RuntimeError("Cache not initialized")
    return catalog_cache
