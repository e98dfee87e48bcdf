"""Unit tests for MemoryCacheProvider."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from analytics_client.providers.cache.memory_cache import MemoryCacheProvider


class TestMemoryCacheProvider:
    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, memory_cache: MemoryCacheProvider) -> None:
        assert await memory_cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, memory_cache: MemoryCacheProvider) -> None:
        await memory_cache.set("key1", "value1")
        assert await memory_cache.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, memory_cache: MemoryCacheProvider) -> None:
        await memory_cache.set("key1", "old", ttl=60)
        await memory_cache.set("key1", "new", ttl=60)
        assert await memory_cache.get("key1") == "new"

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, memory_cache: MemoryCacheProvider) -> None:
        await memory_cache.set("key1", "value1")
        await memory_cache.delete("key1")
        assert await memory_cache.exists("key1") is False

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, memory_cache: MemoryCacheProvider) -> None:
        await memory_cache.delete("nonexistent")  # should not raise

    @pytest.mark.asyncio
    async def test_stores_complex_values(self, memory_cache: MemoryCacheProvider) -> None:
        data = {"rows": [["20240101", "12"]], "totals": {"ga:sessions": "12"}}
        await memory_cache.set("complex", data)
        assert await memory_cache.get("complex") == data


class TestExpiry:
    @pytest.mark.asyncio
    async def test_no_ttl_never_expires(self, memory_cache, clock) -> None:
        await memory_cache.set("key", "value")
        clock.advance(10 * 365 * 24 * 3600)
        assert await memory_cache.exists("key") is True

    @pytest.mark.asyncio
    async def test_seconds_ttl(self, memory_cache, clock) -> None:
        await memory_cache.set("key", "value", ttl=10)
        clock.advance(9)
        assert await memory_cache.get("key") == "value"
        clock.advance(2)
        assert await memory_cache.get("key") is None
        assert await memory_cache.exists("key") is False

    @pytest.mark.asyncio
    async def test_timedelta_ttl(self, memory_cache, clock) -> None:
        await memory_cache.set("key", "value", ttl=timedelta(minutes=5))
        clock.advance(299)
        assert await memory_cache.exists("key") is True
        clock.advance(2)
        assert await memory_cache.exists("key") is False

    @pytest.mark.asyncio
    async def test_absolute_datetime_expiry(self, memory_cache, clock) -> None:
        expires = datetime.fromtimestamp(clock.now + 30, tz=timezone.utc)
        await memory_cache.set("key", "value", ttl=expires)
        clock.advance(29)
        assert await memory_cache.exists("key") is True
        clock.advance(2)
        assert await memory_cache.exists("key") is False

    @pytest.mark.asyncio
    async def test_naive_datetime_is_utc(self, memory_cache, clock) -> None:
        aware = datetime.fromtimestamp(clock.now + 30, tz=timezone.utc)
        await memory_cache.set("key", "value", ttl=aware.replace(tzinfo=None))
        clock.advance(29)
        assert await memory_cache.exists("key") is True
        clock.advance(2)
        assert await memory_cache.exists("key") is False

    @pytest.mark.asyncio
    async def test_already_expired_entry_is_not_stored(self, memory_cache, clock) -> None:
        past = datetime.fromtimestamp(clock.now - 1, tz=timezone.utc)
        await memory_cache.set("key", "value", ttl=past)
        assert await memory_cache.exists("key") is False

    @pytest.mark.asyncio
    async def test_entries_keep_their_own_lifetimes(self, memory_cache, clock) -> None:
        await memory_cache.set("short", 1, ttl=5)
        await memory_cache.set("long", 2, ttl=timedelta(hours=1))
        clock.advance(60)
        assert await memory_cache.get("short") is None
        assert await memory_cache.get("long") == 2


class TestEviction:
    @pytest.mark.asyncio
    async def test_size_is_bounded(self, clock) -> None:
        cache = MemoryCacheProvider(max_size=2, timer=clock)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)

        present = [key for key in ("a", "b", "c") if await cache.exists(key)]
        assert len(present) == 2
        assert "c" in present
