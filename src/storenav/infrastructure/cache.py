"""
Generic LRU cache implementation with TTL support.

This module provides the thread-safe cache the graph coordinator keeps for
shortest path answers. Entries are evicted least recently used first once the
cache is full, and expire after a fixed time to live.

Features:
- LRU eviction policy
- TTL-based expiration
- Thread-safe operations
- Hit and miss metrics
"""

from collections import OrderedDict
from threading import Lock
from time import monotonic
from typing import Dict, Generic, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")  # Type of cached values


class LRUCache(Generic[T]):
    """
    Thread-safe LRU cache with TTL support.

    A max_size of 0 disables caching: every put is dropped and every get misses.

    Attributes:
        max_size: Maximum number of entries to store
        ttl: Time-to-live of an entry in seconds
    """

    def __init__(self, max_size: int, ttl: float):
        """Initialize cache with given parameters."""
        if max_size < 0:
            raise ValueError("max_size must be non-negative")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._entries: "OrderedDict[Hashable, Tuple[T, float]]" = OrderedDict()
        self._lock = Lock()
        self.max_size = max_size
        self.ttl = ttl

        # Metrics
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable) -> Optional[T]:
        """
        Get value from cache.

        Args:
            key: Cache key to look up

        Returns:
            Cached value if found and not expired, None otherwise
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                value, expires_at = entry
                if monotonic() < expires_at:
                    self._hits += 1
                    self._entries.move_to_end(key)
                    return value
                # Expired
                del self._entries[key]
            self._misses += 1
            return None

    def put(self, key: Hashable, value: T) -> None:
        """
        Store value in cache.

        Args:
            key: Cache key to store value under
            value: Value to cache
        """
        if self.max_size == 0:
            return
        with self._lock:
            self._entries[key] = (value, monotonic() + self.ttl)
            self._entries.move_to_end(key)

            # Evict least recently used if over size limit
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def remove(self, key: Hashable) -> None:
        """Remove an item from the cache if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry. Metrics are kept."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_metrics(self) -> Dict[str, float]:
        """
        Get cache performance metrics.

        Returns:
            Dictionary containing:
            - hits: Number of cache hits
            - misses: Number of cache misses
            - size: Current cache size
            - hit_rate: Cache hit rate
        """
        with self._lock:
            total_accesses = self._hits + self._misses
            hit_rate = float(self._hits) / total_accesses if total_accesses > 0 else 0.0
            return {
                "hits": float(self._hits),
                "misses": float(self._misses),
                "size": float(len(self._entries)),
                "hit_rate": hit_rate,
            }
