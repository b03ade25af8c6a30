"""Unit tests for the SeatGeek event search adapter."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.config.settings import Settings
from src.models.query import SearchParams, UpstreamStatus
from src.providers.event.seatgeek_provider import SeatGeekProvider
from src.utils.errors import ConfigurationError


def _response(status: int = 200, payload: Any = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.is_success = 200 <= status < 300
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _provider(settings: Settings, response: MagicMock | None = None, error: Exception | None = None):
    client = AsyncMock(spec=httpx.AsyncClient)
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    return SeatGeekProvider(http_client=client, settings=settings), client


PARAMS = SearchParams(
    city="Dallas",
    state="TX",
    start="2026-01-06T00:00:00",
    end="2026-01-06T23:59:59",
    keywords="theatre",
    page=2,
)


class TestSeatGeekProvider:
    @pytest.mark.asyncio
    async def test_sends_filters_and_maps_events(
        self, settings: Settings, seatgeek_payload: dict
    ) -> None:
        provider, client = _provider(settings, _response(200, seatgeek_payload))
        result = await provider.search(PARAMS)

        assert result.status is UpstreamStatus.OK
        assert [e.title for e in result.events] == [
            "Kimberly Akimbo - Dallas",
            "Kimberly Akimbo - Dallas",
            "Other Show",
        ]
        assert result.events[0].venue == "The Grand, Dallas, TX"
        assert result.events[2].image == "http://event-image"

        args, kwargs = client.get.call_args
        assert args[0] == "https://api.seatgeek.test/2/events"
        sent = kwargs["params"]
        assert sent["client_id"] == "test-id"
        assert sent["venue.city"] == "Dallas"
        assert sent["venue.state"] == "TX"
        assert sent["datetime_local.gte"] == "2026-01-06T00:00:00"
        assert sent["datetime_local.lte"] == "2026-01-06T23:59:59"
        assert sent["q"] == "theatre"
        assert sent["page"] == "2"
        assert sent["sort"] == "datetime_local.asc"

    @pytest.mark.asyncio
    async def test_debug_url_redacts_client_id(self, settings: Settings) -> None:
        provider, _ = _provider(settings, _response(200, {"events": []}))
        result = await provider.search(PARAMS)
        assert "test-id" not in result.debug.url
        assert result.debug.status == 200

    @pytest.mark.asyncio
    async def test_omits_unused_filters(self, settings: Settings) -> None:
        provider, client = _provider(settings, _response(200, {"events": []}))
        await provider.search(SearchParams(page=1))
        sent = client.get.call_args.kwargs["params"]
        for key in ("venue.city", "venue.state", "q", "datetime_local.gte", "datetime_local.lte"):
            assert key not in sent

    @pytest.mark.asyncio
    async def test_empty_page_is_empty_not_failed(self, settings: Settings) -> None:
        provider, _ = _provider(settings, _response(200, {"events": []}))
        result = await provider.search(PARAMS)
        assert result.status is UpstreamStatus.EMPTY
        assert result.has_items is False

    @pytest.mark.asyncio
    async def test_http_error_status(self, settings: Settings) -> None:
        provider, _ = _provider(settings, _response(403, None, text="forbidden" * 100))
        result = await provider.search(PARAMS)
        assert result.status is UpstreamStatus.FAILED
        assert result.debug.status == 403
        assert len(result.debug.body) == 500

    @pytest.mark.asyncio
    async def test_transport_error(self, settings: Settings) -> None:
        provider, _ = _provider(settings, error=httpx.ConnectError("refused"))
        result = await provider.search(PARAMS)
        assert result.status is UpstreamStatus.FAILED
        assert result.debug.status is None
        assert "ConnectError" in result.debug.error

    @pytest.mark.asyncio
    async def test_non_json_payload(self, settings: Settings) -> None:
        provider, _ = _provider(settings, _response(200, ValueError("no json"), text="<html>"))
        result = await provider.search(PARAMS)
        assert result.status is UpstreamStatus.FAILED
        assert result.debug.body == "<html>"

    @pytest.mark.asyncio
    async def test_missing_client_id_raises(self, settings: Settings) -> None:
        settings = settings.model_copy(update={"seatgeek_client_id": ""})
        provider, client = _provider(settings, _response(200, {"events": []}))
        assert provider.is_available() is False
        with pytest.raises(ConfigurationError):
            await provider.search(PARAMS)
        client.get.assert_not_awaited()

    def test_provider_name(self, settings: Settings) -> None:
        provider, _ = _provider(settings, _response())
        assert provider.get_provider_name() == "seatgeek"
