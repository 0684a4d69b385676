"""Thread-safe in-memory cache implementation.

Used for geocoding results, which are slow and rate limited upstream,
so that repeated route requests for the same address stay local.
Negative answers (an address that does not geocode) are cached too,
which is why :meth:`InMemoryCache.contains` exists next to ``get``.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """Thread-safe in-memory cache with optional TTL.

    Attributes:
        default_ttl_seconds: Default time-to-live for entries (None = no expiry)
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging

    Example:
        cache = InMemoryCache[GeoLocation](name="geocode", default_ttl_seconds=3600)
        location = cache.get_or_compute("rivoli", lambda: geocode("rivoli"))
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _live_entry(self, key: str) -> Optional[Tuple[Any, float]]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if time.time() > entry[1]:
            del self._store[key]
            self._logger.debug("Cache entry expired", extra={"key": key})
            return None
        return entry

    def get(self, key: str) -> Optional[T]:
        """Get a value from the cache.

        Returns:
            The cached value, or None if not found or expired.
        """
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry[0]

    def contains(self, key: str) -> bool:
        """Check whether a live entry exists, including cached None values."""
        with self._lock:
            return self._live_entry(key) is not None

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional TTL override for this entry.
        """
        with self._lock:
            # Simple FIFO eviction
            if self.max_size is not None and len(self._store) >= self.max_size:
                if key not in self._store:
                    oldest_key = next(iter(self._store))
                    del self._store[oldest_key]
                    self._logger.debug(
                        "Cache evicted entry",
                        extra={"key": oldest_key, "reason": "max_size"},
                    )

            effective_ttl = ttl if ttl is not None else self.default_ttl_seconds
            if effective_ttl is not None:
                expiry = time.time() + effective_ttl
            else:
                expiry = float("inf")

            self._store[key] = (value, expiry)
            self._logger.debug(
                "Cache entry set",
                extra={"key": key, "ttl": effective_ttl},
            )

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is not None:
                self._hits += 1
                return entry[0]
            self._misses += 1

        # Compute outside the lock to avoid blocking other readers
        self._logger.debug("Cache miss, computing", extra={"key": key})
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Returns:
            True if the key existed and was removed.
        """
        with self._lock:
            if key in self._store:
                del self._store[key]
                self._logger.debug("Cache entry invalidated", extra={"key": key})
                return True
            return False

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counts and size."""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }
