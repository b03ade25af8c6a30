"""Progressive-fallback fetching with per-query pagination.

Filter modes, loosest last:

    CITY_AND_KEYWORDS -- city/state filter and keyword query from interests
    CITY_ONLY         -- city/state filter only
    DATE_ONLY         -- neither (the date filter applies in every mode)

While a query has no mode yet, modes are tried in order on page 1 and the
first one that returns events becomes the query's permanent mode.  Later
pages reuse that mode only.  A page with no events (or a failed call) under
the active mode marks the query exhausted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from src.interfaces.event_search_provider import IEventSearchProvider
from src.models.event import NormalizedEvent
from src.models.query import (
    CacheEntry,
    EventQuery,
    FetchMode,
    SearchParams,
    UpstreamDebug,
    UpstreamResult,
)
from src.services.query_normalizer import day_bounds, keyword_query, parse_location
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


@dataclass(frozen=True)
class FetchStep:
    """What one pagination step produced and the entry state it leads to."""

    new_items: list[NormalizedEvent] = field(default_factory=list)
    page: int = 1
    mode: FetchMode | None = None
    done: bool = False
    debug: UpstreamDebug | None = None
    upstream_calls: int = 0


class FetchOrchestrator:
    """Pulls the next page for a query from an :class:`IEventSearchProvider`."""

    def __init__(self, provider: IEventSearchProvider) -> None:
        self._provider = provider

    @staticmethod
    def build_params(query: EventQuery, page: int, mode: FetchMode) -> SearchParams:
        city, state = parse_location(query.location) if mode.use_city else ("", "")
        start, end = day_bounds(query.date) if query.date else (None, None)
        keywords = keyword_query(query.interests) if mode.use_keywords else ""
        return SearchParams(
            city=city,
            state=state,
            start=start,
            end=end,
            keywords=keywords,
            page=page,
        )

    async def fetch_page(self, query: EventQuery, page: int, mode: FetchMode) -> UpstreamResult:
        """Issue exactly one upstream call for *query* under *mode*."""
        result = await self._provider.search(self.build_params(query, page, mode))
        debug = result.debug.model_copy(update={"mode": int(mode), "page": page})
        return result.model_copy(update={"debug": debug})

    async def next_page(self, query: EventQuery, entry: CacheEntry) -> FetchStep:
        """Advance *entry* by one page.

        Returns
        -------
        FetchStep
            New raw events plus the ``page``/``mode``/``done`` values to commit.
            No upstream call is made for an exhausted entry.
        """
        if entry.done:
            return FetchStep(page=entry.page, mode=entry.mode, done=True)

        if entry.mode is not None:
            result = await self.fetch_page(query, entry.page, entry.mode)
            if result.has_items:
                return FetchStep(
                    new_items=list(result.events),
                    page=entry.page + 1,
                    mode=entry.mode,
                    debug=result.debug,
                    upstream_calls=1,
                )
            _logger.info(
                "query_exhausted",
                key=entry.key,
                page=entry.page,
                mode=int(entry.mode),
                upstream=result.status.value,
            )
            return FetchStep(
                page=entry.page,
                mode=entry.mode,
                done=True,
                debug=result.debug,
                upstream_calls=1,
            )

        return await self._select_mode(query, entry)

    async def _select_mode(self, query: EventQuery, entry: CacheEntry) -> FetchStep:
        tried: list[SearchParams] = []
        last_debug: UpstreamDebug | None = None
        calls = 0

        for mode in FetchMode:
            params = self.build_params(query, entry.page, mode)
            # Without interests (or without a city) two modes send the same
            # request; the second would return the same empty page.
            if params in tried:
                continue
            tried.append(params)

            result = await self.fetch_page(query, entry.page, mode)
            calls += 1
            last_debug = result.debug
            if result.has_items:
                _logger.info(
                    "fetch_mode_selected",
                    key=entry.key,
                    mode=int(mode),
                    results=len(result.events),
                    attempts=calls,
                )
                return FetchStep(
                    new_items=list(result.events),
                    page=entry.page + 1,
                    mode=mode,
                    debug=result.debug,
                    upstream_calls=calls,
                )
            _logger.info(
                "fetch_mode_empty",
                key=entry.key,
                mode=int(mode),
                upstream=result.status.value,
            )

        _logger.info("query_exhausted", key=entry.key, page=entry.page, mode=None)
        return FetchStep(
            page=entry.page,
            mode=None,
            done=True,
            debug=last_debug,
            upstream_calls=calls,
        )
