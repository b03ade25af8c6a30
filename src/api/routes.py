"""FastAPI routes for the ShowFinder API.

Endpoint                      Method  Description
─────────────────────────────────────────────────────────────────────
/api/v1/events                POST    Search (repeat the request for more)
/api/v1/events                GET     Usage hint for manual testing
/api/v1/events/cache          DELETE  Forget accumulated state for a query
/api/v1/health                GET     Liveness + configured providers
/api/v1/version               GET     Name, version, environment, time

Dependencies are read from ``app.state`` (populated by the lifespan in
``src/main.py``) through ``Depends`` with the ``Annotated`` pattern.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends, Request

from src.api.schemas import (
    CacheResetResponse,
    ErrorResponse,
    EventSearchHint,
    EventSearchRequest,
    EventSearchResponse,
    HealthResponse,
    VersionResponse,
)
from src.pipeline.event_pipeline import EventSearchPipeline
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

APP_NAME = "showfinder"
APP_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1")


def _get_pipeline(request: Request) -> EventSearchPipeline:
    """Return the event search pipeline from application state."""
    return request.app.state.pipeline


def _get_provider_registry(request: Request) -> dict[str, bool]:
    return getattr(request.app.state, "provider_registry", {})


def _get_app_env(request: Request) -> str:
    return getattr(request.app.state, "app_env", "development")


PipelineDep = Annotated[EventSearchPipeline, Depends(_get_pipeline)]
ProviderRegistryDep = Annotated[dict[str, bool], Depends(_get_provider_registry)]
AppEnvDep = Annotated[str, Depends(_get_app_env)]


@router.post(
    "/events",
    response_model=EventSearchResponse,
    responses={500: {"model": ErrorResponse}},
)
async def search_events(
    body: EventSearchRequest,
    pipeline: PipelineDep,
) -> EventSearchResponse:
    """Return deduplicated, enriched events for ``{location, interests, date}``.

    Each call for the same logical query (case and interest order do not
    matter) fetches one more upstream page and returns the full merged list.
    """
    result = await pipeline.search(body)
    return EventSearchResponse(
        items=result.items,
        descriptions=result.descriptions,
        debug=result.debug,
    )


@router.get("/events", response_model=EventSearchHint)
async def events_hint() -> EventSearchHint:
    return EventSearchHint(
        hint=(
            "POST /api/v1/events with "
            "{ location: 'City, ST', interests: [..], date: 'YYYY-MM-DD' }"
        )
    )


@router.delete("/events/cache", response_model=CacheResetResponse)
async def reset_event_cache(
    body: Annotated[EventSearchRequest, Body()],
    pipeline: PipelineDep,
) -> CacheResetResponse:
    """Drop cached pages for a query so the next search starts from page 1."""
    key, removed = await pipeline.reset(body)
    return CacheResetResponse(key=key, invalidated=removed)


@router.get("/health", response_model=HealthResponse)
async def health(
    pipeline: PipelineDep,
    providers: ProviderRegistryDep,
) -> HealthResponse:
    cached = await pipeline.cache_store.size()
    return HealthResponse(
        status="ok",
        version=APP_VERSION,
        providers=providers,
        cached_queries=cached,
    )


@router.get("/version", response_model=VersionResponse)
async def version(app_env: AppEnvDep) -> VersionResponse:
    return VersionResponse(
        name=APP_NAME,
        version=APP_VERSION,
        environment=app_env,
        time=datetime.now(tz=timezone.utc).isoformat(),
    )
