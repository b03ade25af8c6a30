"""ShowFinder FastAPI application entry point.

Wires providers and services together, stores them on ``app.state`` for
the routes, configures structured logging and middleware, and closes the
shared HTTP client on shutdown.  ``build_pipeline`` is reused by the CLI.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import APP_VERSION
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.pipeline.event_pipeline import EventSearchPipeline
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.event.seatgeek_provider import SeatGeekProvider
from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider
from src.services.enrichment import EnrichmentService
from src.services.query_cache import QueryCacheStore
from src.services.summarizer import LLMSummarizer
from src.utils.logging import configure_logging, get_logger

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider | None:
    """Return the first LLM provider with a configured key, or ``None``.

    Priority order: Anthropic -> OpenAI.
    """
    if app_settings.anthropic_api_key:
        return AnthropicLLMProvider(settings=app_settings)
    if app_settings.openai_api_key:
        return OpenAILLMProvider(settings=app_settings)
    return None


def _build_summarizer(
    app_settings: Settings, config: dict[str, Any]
) -> LLMSummarizer | None:
    enrichment_cfg = config.get("enrichment", {})
    if not enrichment_cfg.get("enabled", app_settings.enrichment_enabled):
        return None
    llm = _build_llm_provider(app_settings)
    if llm is None:
        return None
    summarizer_cfg = config.get("summarizer", {})
    return LLMSummarizer(
        llm=llm,
        max_chars=summarizer_cfg.get("max_chars", 200),
        temperature=summarizer_cfg.get("temperature", 0.7),
        max_tokens=summarizer_cfg.get("max_tokens", 120),
    )


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def build_pipeline(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
    config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Construct the provider and service graph around *http_client*.

    Returns a flat dict of named components; ``create_app``'s lifespan
    copies them onto ``app.state``.
    """
    config = config if config is not None else load_config(settings=app_settings)

    cache_cfg = config.get("query_cache", {})
    enrichment_cfg = config.get("enrichment", {})

    provider = SeatGeekProvider(http_client=http_client, settings=app_settings)
    cache_store = QueryCacheStore(
        MemoryCacheProvider(
            max_size=cache_cfg.get("max_size", app_settings.query_cache_max_size),
            ttl=cache_cfg.get("ttl_seconds", app_settings.query_cache_ttl_seconds),
        )
    )
    summarizer = _build_summarizer(app_settings, config)
    enrichment = EnrichmentService(
        summarizer=summarizer,
        concurrency=enrichment_cfg.get("concurrency", app_settings.enrichment_concurrency),
    )
    pipeline = EventSearchPipeline(
        provider=provider,
        cache_store=cache_store,
        enrichment=enrichment,
    )

    provider_registry: dict[str, bool] = {
        provider.get_provider_name(): provider.is_available(),
        "summarizer": summarizer is not None,
    }

    return {
        "pipeline": pipeline,
        "provider_registry": provider_registry,
        "summarizer_name": summarizer.provider_name if summarizer else None,
        "app_env": app_settings.app_env,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        http_client = httpx.AsyncClient(timeout=app_settings.upstream_timeout_seconds)
        components = build_pipeline(app_settings, http_client)
        for key, value in components.items():
            setattr(application.state, key, value)

        if not app_settings.seatgeek_client_id:
            _logger.warning("seatgeek_client_id_missing", msg="POST /events will return 500")

        _logger.info(
            "app_startup",
            version=APP_VERSION,
            environment=app_settings.app_env,
            summarizer=components["summarizer_name"],
            enrichment_concurrency=components["pipeline"].enrichment.concurrency,
        )

        yield

        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="ShowFinder API",
        version=APP_VERSION,
        description=(
            "Search local events by city, interests and date. Repeated showings "
            "are merged into one listing, results accumulate page by page across "
            "repeated requests, and each listing carries a short blurb."
        ),
        lifespan=_lifespan,
    )

    # Last added = outermost.
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.get_cors_origins())

    application.include_router(api_router)

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"message": "API is up. Try GET /api/v1/health or POST /api/v1/events"}

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
