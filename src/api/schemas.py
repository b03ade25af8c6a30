"""Pydantic request/response schemas for the ShowFinder API.

These define the HTTP contract: FastAPI validates request bodies against
them (422 on mismatch), serializes responses through them, and publishes
them in the OpenAPI docs at ``/docs``.  Event records reuse the pipeline
models, which serialize with camelCase keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.event import EnrichedEvent
from src.models.query import EventQuery, UpstreamDebug


class EventSearchRequest(EventQuery):
    """Body of ``POST /events``: ``{location, interests, date?}``."""


class EventSearchResponse(BaseModel):
    """Everything accumulated so far for the query, plus diagnostics."""

    items: list[EnrichedEvent] = Field(default_factory=list)
    descriptions: list[str] = Field(
        default_factory=list, description="Non-empty snippets of items, in item order."
    )
    debug: UpstreamDebug | None = Field(
        default=None, description="Last upstream call for this query (URL, status)."
    )


class EventSearchHint(BaseModel):
    hint: str


class CacheResetResponse(BaseModel):
    key: str
    invalidated: bool


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    providers: dict[str, bool] = Field(default_factory=dict)
    cached_queries: int = 0


class VersionResponse(BaseModel):
    name: str
    version: str
    environment: str
    time: str


class ErrorResponse(BaseModel):
    """Body returned for any non-validation error."""

    error: str
    detail: str | None = None
    extra: dict[str, Any] | None = None
