"""Incremental per-query result cache.

Each canonical query key maps to a :class:`CacheEntry` holding the merged
events seen so far, the next page to fetch, the fetch mode that produced
results and whether the upstream source is exhausted.  Entries live in an
:class:`ICacheProvider` (bounded TTL cache by default) and are replaced
wholesale on every commit.

Mutation of a single key is serialized with :meth:`QueryCacheStore.lock`;
the request pipeline holds that lock from ``get_or_create`` through
``commit`` so two concurrent requests for the same query cannot both fetch
the same page.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Sequence

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.models.event import EnrichedEvent, NormalizedEvent
from src.models.query import CacheEntry, FetchMode, UpstreamDebug
from src.services.dedup import dedupe_events
from src.utils.concurrency import KeyedLocks
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


class QueryCacheStore:
    """Owns every :class:`CacheEntry`, keyed by canonical query key.

    Parameters
    ----------
    cache:
        Backing key-value store.  Its size bound and TTL are the eviction
        policy for query state.
    """

    def __init__(self, cache: ICacheProvider) -> None:
        self._cache = cache
        self._locks = KeyedLocks()

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        """Hold the per-key lock for the duration of the ``async with`` block."""
        lock = self._locks.get(key)
        async with lock:
            yield

    async def get(self, key: str) -> CacheEntry | None:
        return await self._cache.get(key)

    async def get_or_create(self, key: str) -> CacheEntry:
        """Return the entry for *key*, creating a fresh one (page 1) if absent."""
        entry = await self._cache.get(key)
        if entry is None:
            entry = CacheEntry(key=key)
            await self._cache.set(key, entry)
            _logger.info("query_cache_created", key=key)
        return entry

    @staticmethod
    def merge(
        existing: Sequence[EnrichedEvent],
        new_items: Sequence[NormalizedEvent],
    ) -> list[EnrichedEvent]:
        """Full re-dedupe of cached items followed by newly fetched showings."""
        return dedupe_events([*existing, *new_items])

    async def commit(
        self,
        key: str,
        items: Sequence[EnrichedEvent],
        page: int,
        mode: FetchMode | None,
        done: bool,
        debug: UpstreamDebug | None = None,
    ) -> CacheEntry:
        """Replace the entry for *key* with the given state and return it.

        ``debug`` keeps the previous value when omitted, so a request that
        made no upstream call still reports the last one that happened.
        """
        previous = await self._cache.get(key)
        if debug is None and previous is not None:
            debug = previous.debug

        entry = CacheEntry(
            key=key,
            items=list(items),
            page=page,
            mode=mode,
            done=done,
            debug=debug,
            updated_at=datetime.now(tz=timezone.utc),
        )
        await self._cache.set(key, entry)
        _logger.info(
            "query_cache_commit",
            key=key,
            items=len(entry.items),
            next_page=page,
            mode=None if mode is None else int(mode),
            done=done,
        )
        return entry

    async def invalidate(self, key: str) -> bool:
        """Drop the entry for *key* so the next request starts again from page 1."""
        async with self.lock(key):
            removed = await self._cache.delete(key)
        _logger.info("query_cache_invalidated", key=key, removed=removed)
        return removed

    async def size(self) -> int:
        return await self._cache.size()
