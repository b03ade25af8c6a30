"""Shared pytest fixtures for the ShowFinder test suite."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config.settings import Settings
from src.interfaces.event_search_provider import IEventSearchProvider
from src.interfaces.llm_provider import ILLMProvider
from src.models.event import NormalizedEvent
from src.models.query import SearchParams, UpstreamDebug, UpstreamResult

Responder = Callable[[SearchParams], UpstreamResult]


class ScriptedSearchProvider(IEventSearchProvider):
    """In-memory search provider; a *responder* decides what each call returns."""

    def __init__(self, responder: Responder, available: bool = True) -> None:
        self._responder = responder
        self._available = available
        self.calls: list[SearchParams] = []

    async def search(self, params: SearchParams) -> UpstreamResult:
        self.calls.append(params)
        return self._responder(params)

    def get_provider_name(self) -> str:
        return "scripted"

    def is_available(self) -> bool:
        return self._available


def ok_result(events: list[NormalizedEvent], page: int = 1) -> UpstreamResult:
    return UpstreamResult.ok(events, UpstreamDebug(url=f"https://test/events?page={page}", status=200))


def failed_result(status: int = 500) -> UpstreamResult:
    return UpstreamResult.failed(
        UpstreamDebug(url="https://test/events", status=status, error=f"HTTP {status}")
    )


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and no LLM keys."""
    return Settings(
        seatgeek_client_id="test-id",
        seatgeek_base_url="https://api.seatgeek.test/2",
        openai_api_key="",
        anthropic_api_key="",
        enrichment_concurrency=3,
        app_env="test",
    )


@pytest.fixture
def make_event() -> Callable[..., NormalizedEvent]:
    def _make(
        title: str = "Show A",
        venue: str | None = "Main Hall",
        start_time: str | None = "2026-01-06T19:00:00",
        **extra: Any,
    ) -> NormalizedEvent:
        return NormalizedEvent(title=title, venue=venue, start_time=start_time, **extra)

    return _make


@pytest.fixture
def make_provider() -> Callable[..., ScriptedSearchProvider]:
    def _make(responder: Responder, available: bool = True) -> ScriptedSearchProvider:
        return ScriptedSearchProvider(responder, available=available)

    return _make


@pytest.fixture
def mock_llm() -> MagicMock:
    """An ILLMProvider whose ``complete`` returns a fixed blurb."""
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value="Short blurb")
    llm.get_provider_name.return_value = "mock-llm"
    llm.is_available.return_value = True
    return llm


@pytest.fixture
def seatgeek_payload() -> dict[str, Any]:
    """Two showings of one show plus a second show with only an event image."""
    return {
        "events": [
            {
                "title": "Kimberly Akimbo - Dallas",
                "venue": {"name": "The Grand", "city": "Dallas", "state": "TX"},
                "datetime_local": "2026-01-07T13:30:00",
                "performers": [{"name": "A", "image": "http://perf-image"}],
                "url": "http://example.com/e1",
            },
            {
                "title": "Kimberly Akimbo - Dallas",
                "venue": {"name": "The Grand", "city": "Dallas", "state": "TX"},
                "datetime_local": "2026-01-06T13:30:00",
                "performers": [{"name": "A", "image": "http://perf-image"}],
                "url": "http://example.com/e1",
            },
            {
                "title": "Other Show",
                "venue": {"name": "Side Hall", "city": "Dallas", "state": "TX"},
                "datetime_local": "2026-01-07T15:00:00",
                "image": "http://event-image",
                "url": "http://example.com/e2",
            },
        ]
    }
