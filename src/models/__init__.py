"""ShowFinder domain models.

    event.py  -- raw SeatGeek records and the normalized / deduped /
                 enriched event stages
    query.py  -- search queries, fetch modes, upstream results and the
                 per-query cache entry
"""

from src.models.event import (
    UNTITLED_EVENT,
    DedupedEvent,
    EnrichedEvent,
    NormalizedEvent,
    SeatGeekEvent,
    SeatGeekPerformer,
    SeatGeekVenue,
)
from src.models.query import (
    CacheEntry,
    EventQuery,
    FetchMode,
    SearchParams,
    UpstreamDebug,
    UpstreamResult,
    UpstreamStatus,
)

__all__ = [
    "CacheEntry",
    "DedupedEvent",
    "EnrichedEvent",
    "EventQuery",
    "FetchMode",
    "NormalizedEvent",
    "SearchParams",
    "SeatGeekEvent",
    "SeatGeekPerformer",
    "SeatGeekVenue",
    "UNTITLED_EVENT",
    "UpstreamDebug",
    "UpstreamResult",
    "UpstreamStatus",
]
