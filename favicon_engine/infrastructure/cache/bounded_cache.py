"""In-memory LRU cache with hit/miss statistics.

Backs the favicon, color and negative-result caches. Single event loop, so
no locking. OrderedDict keeps recency order: first entry is least recently
used, last is most recently used.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from favicon_engine.domain.exceptions import CacheConfigurationException

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_NOT_SET = object()


def format_percent(numerator: int, denominator: int) -> str:
    """Format a ratio as 'NN.N%', or 'N/A' when denominator is zero."""
    if denominator <= 0:
        return "N/A"
    return f"{numerator / denominator * 100:.1f}%"


@dataclass(frozen=True, kw_only=True)
class CacheStats:
    """Point-in-time cache statistics."""

    hits: int
    misses: int
    evictions: int
    sets: int
    size: int
    max_size: int
    hit_rate: str
    utilization_percent: str


class BoundedCache(Generic[K, V]):
    """Capacity-limited key/value store with LRU eviction.

    get() promotes a hit to most-recently-used unless it already is; has()
    never reorders. Counters are monotonic until clear().
    """

    def __init__(self, max_size: int = 100) -> None:
        """Initialize an empty cache.

        Args:
            max_size: Maximum number of entries (at least 1).

        Raises:
            CacheConfigurationException: If max_size is below 1.
        """
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 1:
            raise CacheConfigurationException(max_size)
        self.max_size = max_size
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._last_key: Any = _NOT_SET
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._sets = 0

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the cached value for key, or default on a miss."""
        if key not in self._entries:
            self._misses += 1
            return default
        self._hits += 1
        # Hot keys are already at the end; skip the reorder.
        if self._last_key != key:
            self._entries.move_to_end(key)
            self._last_key = key
        return self._entries[key]

    def set(self, key: K, value: V) -> None:
        """Store value under key, evicting the LRU entry if the cache is full."""
        self._sets += 1
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            if self._last_key == evicted:
                self._last_key = _NOT_SET
            logger.debug("Cache EVICT: %s", evicted)
        self._entries[key] = value
        self._last_key = key

    def has(self, key: K) -> bool:
        """Return True if key is cached. Does not update recency or stats."""
        return key in self._entries

    def delete(self, key: K) -> bool:
        """Remove key. Returns True if it was present."""
        if self._last_key == key:
            self._last_key = _NOT_SET
        return self._entries.pop(key, _NOT_SET) is not _NOT_SET

    def clear(self) -> None:
        """Remove every entry and reset all counters."""
        self._entries.clear()
        self._last_key = _NOT_SET
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._sets = 0

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[K]:
        """Keys ordered from least to most recently used."""
        return list(self._entries.keys())

    def values(self) -> list[V]:
        """Values ordered from least to most recently used."""
        return list(self._entries.values())

    def items(self) -> list[tuple[K, V]]:
        """(key, value) pairs ordered from least to most recently used."""
        return list(self._entries.items())

    def get_stats(self) -> CacheStats:
        """Return hit/miss/eviction counters plus hit rate and utilization."""
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            sets=self._sets,
            size=len(self._entries),
            max_size=self.max_size,
            hit_rate=format_percent(self._hits, self._hits + self._misses),
            utilization_percent=format_percent(len(self._entries), self.max_size),
        )
