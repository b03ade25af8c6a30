"""Event search pipeline: one request in, one page of merged results out.

Per request:

    EventQuery
      -> canonical query key
      -> cache entry (created on first sight, locked for this request)
      -> next upstream page via the fetch orchestrator (skipped once done)
      -> full re-dedupe of cached items + new showings
      -> enrichment of events still missing a snippet
      -> commit (items, next page, mode, done)
      -> EventSearchResult

Every request for the same query returns the whole accumulated list, so a
client paginates simply by repeating its request.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from src.interfaces.event_search_provider import IEventSearchProvider
from src.models.event import EnrichedEvent
from src.models.query import EventQuery, UpstreamDebug
from src.services.enrichment import EnrichmentService
from src.services.fetch_orchestrator import FetchOrchestrator
from src.services.query_cache import QueryCacheStore
from src.services.query_normalizer import query_key_for
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


@dataclass(frozen=True)
class EventSearchResult:
    key: str
    items: list[EnrichedEvent] = field(default_factory=list)
    debug: UpstreamDebug | None = None
    page: int = 1
    done: bool = False
    new_items: int = 0

    @property
    def descriptions(self) -> list[str]:
        """Non-empty snippets of ``items``, in item order."""
        return [item.snippet for item in self.items if item.snippet]


class EventSearchPipeline:
    """Runs the fetch → merge → enrich → commit cycle for one query.

    Parameters
    ----------
    provider:
        Upstream event search source.
    cache_store:
        Per-query state (shared across requests).
    enrichment:
        Snippet stage.
    """

    def __init__(
        self,
        provider: IEventSearchProvider,
        cache_store: QueryCacheStore,
        enrichment: EnrichmentService,
    ) -> None:
        self._provider = provider
        self._fetcher = FetchOrchestrator(provider)
        self._cache = cache_store
        self._enrichment = enrichment

    @property
    def cache_store(self) -> QueryCacheStore:
        return self._cache

    @property
    def enrichment(self) -> EnrichmentService:
        return self._enrichment

    async def search(self, query: EventQuery) -> EventSearchResult:
        """Return every event accumulated so far for *query*, one page further along.

        Raises
        ------
        ConfigurationError
            If the upstream provider has no credentials.
        """
        if not self._provider.is_available():
            raise ConfigurationError(
                message="Server missing SEATGEEK_CLIENT_ID",
                provider_name=self._provider.get_provider_name(),
            )

        key = query_key_for(query)
        log = _logger.bind(key=key)

        async with self._cache.lock(key):
            entry = await self._cache.get_or_create(key)
            step = await self._fetcher.next_page(query, entry)

            merged = self._cache.merge(entry.items, step.new_items)
            enriched = await self._enrichment.enrich(merged)

            entry = await self._cache.commit(
                key,
                enriched,
                page=step.page,
                mode=step.mode,
                done=step.done,
                debug=step.debug,
            )

        log.info(
            "event_search_complete",
            new_showings=len(step.new_items),
            items=len(entry.items),
            upstream_calls=step.upstream_calls,
            next_page=entry.page,
            done=entry.done,
        )
        return EventSearchResult(
            key=key,
            items=list(entry.items),
            debug=entry.debug,
            page=entry.page,
            done=entry.done,
            new_items=len(step.new_items),
        )

    async def reset(self, query: EventQuery) -> tuple[str, bool]:
        """Forget the accumulated state for *query*; return ``(key, removed)``."""
        key = query_key_for(query)
        removed = await self._cache.invalidate(key)
        return key, removed
