"""Tests for BoundedCache (LRU eviction, promotion, statistics)."""

import pytest

from favicon_engine.domain.exceptions import CacheConfigurationException
from favicon_engine.infrastructure.cache.bounded_cache import BoundedCache


class TestConstruction:
    """Capacity must be at least 1."""

    @pytest.mark.parametrize("max_size", [0, -1])
    def test_capacity_below_one_rejected(self, max_size: int) -> None:
        with pytest.raises(CacheConfigurationException) as exc_info:
            BoundedCache(max_size)
        assert exc_info.value.error_code == "CACHE_CONFIGURATION_ERROR"
        assert exc_info.value.details == {"max_size": max_size}

    def test_capacity_one_allowed(self) -> None:
        cache = BoundedCache(1)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.keys() == ["b"]


class TestGetSet:
    """get/set semantics and hit/miss counting."""

    def test_miss_returns_default_and_counts(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        assert cache.get("missing") is None
        assert cache.get("missing", 7) == 7
        stats = cache.get_stats()
        assert stats.misses == 2
        assert stats.hits == 0

    def test_hit_returns_value_and_counts(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert cache.get_stats().hits == 1

    def test_overwrite_keeps_size_and_promotes(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert len(cache) == 2
        assert cache.keys() == ["b", "a"]
        assert cache.get("a") == 10
        assert cache.get_stats().sets == 3


class TestEviction:
    """Inserting past capacity evicts exactly the least recently touched key."""

    def test_evicts_oldest_on_overflow(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        for i, key in enumerate("abc"):
            cache.set(key, i)
        cache.set("d", 3)
        assert cache.keys() == ["b", "c", "d"]
        assert cache.get_stats().evictions == 1

    def test_get_promotes_to_most_recent(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        for i, key in enumerate("abc"):
            cache.set(key, i)
        cache.get("a")
        cache.set("d", 3)
        assert "a" in cache
        assert "b" not in cache

    def test_repeated_gets_do_not_change_order(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        for i, key in enumerate("abc"):
            cache.set(key, i)
        cache.get("b")
        order = cache.keys()
        for _ in range(5):
            cache.get("b")
        assert cache.keys() == order == ["a", "c", "b"]

    def test_size_never_exceeds_capacity(self) -> None:
        cache: BoundedCache[int, int] = BoundedCache(4)
        for i in range(50):
            cache.set(i % 7, i)
            cache.get((i * 3) % 7)
            assert len(cache) <= 4

    def test_has_does_not_reorder(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.has("a")
        cache.set("c", 3)
        assert not cache.has("a")
        stats = cache.get_stats()
        assert stats.hits == 0
        assert stats.misses == 0


class TestDeleteAndClear:
    """delete() removes single entries; clear() resets storage and counters."""

    def test_delete(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(3)
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert len(cache) == 0

    def test_delete_most_recent_then_get_promotes_again(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("b")
        cache.set("c", 3)
        cache.get("a")
        cache.set("d", 4)
        assert cache.keys() == ["a", "d"]

    def test_clear_resets_counters(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(1)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("b")
        cache.get("zzz")
        cache.clear()
        stats = cache.get_stats()
        assert len(cache) == 0
        assert (stats.hits, stats.misses, stats.evictions, stats.sets) == (0, 0, 0, 0)


class TestStats:
    """Hit rate and utilization formatting."""

    def test_hit_rate_na_without_accesses(self) -> None:
        stats = BoundedCache(10).get_stats()
        assert stats.hit_rate == "N/A"
        assert stats.utilization_percent == "0.0%"

    def test_hit_rate_and_utilization(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(4)
        cache.set("a", 1)
        cache.get("a")
        cache.get("a")
        cache.get("a")
        cache.get("b")
        stats = cache.get_stats()
        assert stats.hit_rate == "75.0%"
        assert stats.utilization_percent == "25.0%"
        assert stats.size == 1
        assert stats.max_size == 4
