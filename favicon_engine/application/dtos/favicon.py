"""Favicon resolver DTOs: warming results and combined cache statistics."""

from __future__ import annotations

import asyncio
from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from favicon_engine.infrastructure.cache.bounded_cache import CacheStats


@dataclass(frozen=True, kw_only=True)
class WarmResult:
    """Outcome of one background warming run.

    warmed + failed + skipped == total; skipped counts directories never
    started or cut off by the timeout.
    """

    warmed: int
    failed: int
    skipped: int
    total: int
    duration_ms: int


@dataclass(frozen=True)
class WarmHandle:
    """Returned immediately by warm_cache(); await it (or .task) for the WarmResult."""

    background: bool
    task: asyncio.Task[WarmResult]

    def __await__(self) -> Generator[Any, None, WarmResult]:
        return self.task.__await__()


@dataclass(frozen=True, kw_only=True)
class ResolverStats:
    """Per-cache statistics plus combined totals."""

    favicon_cache: CacheStats
    color_cache: CacheStats
    negative_cache: CacheStats
    negative_cache_ttl_seconds: float
    total_hits: int
    total_misses: int
    total_evictions: int
    overall_hit_rate: str
