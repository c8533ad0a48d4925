"""Cache: in-memory LRU cache and cache key utilities.

Used by the color assigner and the favicon resolver so repeated polling
never re-walks the filesystem. Key format is in keys.py (DRY).
"""

from favicon_engine.infrastructure.cache.bounded_cache import (
    BoundedCache,
    CacheStats,
)
from favicon_engine.infrastructure.cache.keys import make_cache_key

__all__ = [
    "BoundedCache",
    "CacheStats",
    "make_cache_key",
]
