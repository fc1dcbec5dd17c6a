"""Unit tests for the single-slot TrackCache."""

from __future__ import annotations

import pytest

from listening_to.providers.cache.memory_cache import TrackCache

_TTL = 5000


class TestTrackCacheGet:
    def test_empty_cache_returns_none(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        assert cache.get() is None

    def test_returns_value_within_ttl(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        assert cache.get() == "a"

    def test_returns_value_just_before_expiry(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        clock.advance(_TTL - 1)
        assert cache.get() == "a"

    def test_returns_none_after_expiry(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        clock.advance(_TTL + 1)
        assert cache.get() is None

    def test_expires_exactly_at_ttl(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        clock.advance(_TTL)
        assert cache.get() is None

    def test_reading_does_not_extend_lifetime(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        clock.advance(_TTL - 10)
        assert cache.get() == "a"
        clock.advance(20)
        assert cache.get() is None

    def test_returns_same_object(self, clock) -> None:
        cache: TrackCache[dict] = TrackCache(_TTL, timer=clock)
        data = {"id": 1, "nested": {"value": True}}
        cache.set(data)
        assert cache.get() is data


class TestTrackCacheSet:
    def test_overwrites_existing_value(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("first")
        cache.set("second")
        assert cache.get() == "second"

    def test_set_restarts_ttl_window(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("first")
        clock.advance(3000)
        cache.set("second")
        clock.advance(3000)
        assert cache.get() == "second"

    def test_set_after_expiry_stores_new_value(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("old")
        clock.advance(_TTL * 2)
        cache.set("new")
        assert cache.get() == "new"


class TestTrackCacheClear:
    def test_clear_drops_value_with_no_elapsed_time(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        cache.clear()
        assert cache.get() is None

    def test_set_after_clear_restarts_window(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.set("a")
        clock.advance(4000)
        cache.clear()
        cache.set("b")
        clock.advance(_TTL - 1)
        assert cache.get() == "b"

    def test_clear_on_empty_cache_is_noop(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(_TTL, timer=clock)
        cache.clear()
        cache.clear()
        assert cache.get() is None


class TestTrackCacheTTLVariations:
    def test_short_ttl(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(100, timer=clock)
        cache.set("x")
        clock.advance(99)
        assert cache.get() == "x"
        clock.advance(2)
        assert cache.get() is None

    def test_long_ttl(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(1_000_000, timer=clock)
        cache.set("x")
        clock.advance(999_999)
        assert cache.get() == "x"

    def test_zero_ttl_never_hits(self, clock) -> None:
        cache: TrackCache[str] = TrackCache(0, timer=clock)
        cache.set("x")
        assert cache.get() is None

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(ValueError):
            TrackCache(-1)

    def test_default_timer_is_monotonic(self) -> None:
        cache: TrackCache[str] = TrackCache(60_000)
        cache.set("x")
        assert cache.get() == "x"
        assert cache.ttl_ms == 60_000
