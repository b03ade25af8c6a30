"""Unit tests for MemoryCacheProvider and QueryCacheStore."""

from __future__ import annotations

import asyncio

import pytest

from src.models.event import EnrichedEvent, NormalizedEvent
from src.models.query import FetchMode, UpstreamDebug
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.query_cache import QueryCacheStore


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=2, ttl=3600)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        assert await cache.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_delete_reports_removal(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        assert await cache.delete("key1") is True
        assert await cache.delete("key1") is False
        assert await cache.get("key1") is None

    @pytest.mark.asyncio
    async def test_size_is_bounded(self, cache: MemoryCacheProvider) -> None:
        for i in range(5):
            await cache.set(f"k{i}", i)
        assert await cache.size() == 2
        assert cache.max_size == 2


# ======================================================================
# QueryCacheStore
# ======================================================================


class TestQueryCacheStore:
    @pytest.fixture()
    def store(self) -> QueryCacheStore:
        return QueryCacheStore(MemoryCacheProvider(max_size=16, ttl=3600))

    @pytest.mark.asyncio
    async def test_get_or_create_starts_at_page_one(self, store: QueryCacheStore) -> None:
        entry = await store.get_or_create("k")
        assert entry.page == 1
        assert entry.mode is None
        assert entry.done is False
        assert entry.items == []
        assert await store.get("k") == entry

    @pytest.mark.asyncio
    async def test_commit_replaces_entry(self, store: QueryCacheStore) -> None:
        await store.get_or_create("k")
        item = EnrichedEvent(title="X", snippet="s")
        debug = UpstreamDebug(url="https://test", status=200, mode=0, page=1)
        entry = await store.commit("k", [item], page=2, mode=FetchMode.CITY_ONLY, done=False, debug=debug)
        assert entry.page == 2
        assert entry.mode is FetchMode.CITY_ONLY
        assert (await store.get("k")).items == [item]

    @pytest.mark.asyncio
    async def test_commit_without_debug_keeps_previous(self, store: QueryCacheStore) -> None:
        debug = UpstreamDebug(url="https://test", status=200)
        await store.commit("k", [], page=2, mode=FetchMode.DATE_ONLY, done=False, debug=debug)
        entry = await store.commit("k", [], page=2, mode=FetchMode.DATE_ONLY, done=True)
        assert entry.debug == debug

    @pytest.mark.asyncio
    async def test_invalidate(self, store: QueryCacheStore) -> None:
        await store.get_or_create("k")
        assert await store.invalidate("k") is True
        assert await store.get("k") is None
        assert await store.invalidate("k") is False

    def test_merge_dedupes_new_items_into_existing(self) -> None:
        existing = [EnrichedEvent(title="X", venue="V", start_time="2026-01-07T10:00:00", snippet="s")]
        new = [NormalizedEvent(title="x", venue="v", start_time="2026-01-06T10:00:00")]
        [merged] = QueryCacheStore.merge(existing, new)
        assert merged.showings == 2
        assert merged.start_time == "2026-01-06T10:00:00"
        assert merged.snippet == "s"

    @pytest.mark.asyncio
    async def test_lock_serializes_same_key(self, store: QueryCacheStore) -> None:
        events: list[str] = []

        async def critical(name: str) -> None:
            async with store.lock("k"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.005)
                events.append(f"{name}-end")

        await asyncio.gather(critical("a"), critical("b"))
        assert events == ["a-start", "a-end", "b-start", "b-end"]

    @pytest.mark.asyncio
    async def test_size(self, store: QueryCacheStore) -> None:
        await store.get_or_create("a")
        await store.get_or_create("b")
        assert await store.size() == 2
