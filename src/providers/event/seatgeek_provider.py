"""SeatGeek event search adapter (``GET /2/events``).

Issues one request per call through an injected ``httpx.AsyncClient`` and
maps the ``events`` array onto :class:`NormalizedEvent`.  Failures are
returned, not raised: non-2xx responses, transport errors and payloads that
are not a JSON object all become a ``FAILED`` :class:`UpstreamResult` whose
debug block records what happened.  The ``client_id`` is redacted from the
URL kept in debug output.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.event_search_provider import IEventSearchProvider
from src.models.query import SearchParams, UpstreamDebug, UpstreamResult
from src.services.event_mapper import map_raw_events
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

_SORT = "datetime_local.asc"
_DEBUG_BODY_LIMIT = 500


class SeatGeekProvider(IEventSearchProvider):
    """Searches SeatGeek's public events API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` (shared, owned by the app lifespan).
    settings:
        Supplies the client id, base URL, page size and request timeout.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._client_id = settings.seatgeek_client_id
        self._endpoint = settings.seatgeek_base_url.rstrip("/") + "/events"
        self._per_page = settings.seatgeek_per_page
        self._timeout = settings.upstream_timeout_seconds
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_query_params(self, params: SearchParams) -> dict[str, str]:
        query: dict[str, str] = {
            "client_id": self._client_id,
            "per_page": str(self._per_page),
            "sort": _SORT,
            "page": str(params.page),
        }
        if params.city:
            query["venue.city"] = params.city
        if params.state:
            query["venue.state"] = params.state
        if params.start:
            query["datetime_local.gte"] = params.start
        if params.end:
            query["datetime_local.lte"] = params.end
        if params.keywords:
            query["q"] = params.keywords
        return query

    def _debug_url(self, query: dict[str, str]) -> str:
        redacted = {**query, "client_id": "***"}
        return str(httpx.URL(self._endpoint, params=redacted))

    # ------------------------------------------------------------------
    # IEventSearchProvider implementation
    # ------------------------------------------------------------------

    async def search(self, params: SearchParams) -> UpstreamResult:
        if not self.is_available():
            raise ConfigurationError(
                message="Server missing SEATGEEK_CLIENT_ID",
                provider_name=self.get_provider_name(),
            )

        query = self._build_query_params(params)
        url = self._debug_url(query)

        try:
            response = await self._http.get(self._endpoint, params=query, timeout=self._timeout)
        except httpx.HTTPError as exc:
            self._logger.warning("upstream_request_failed", url=url, error=str(exc))
            return UpstreamResult.failed(
                UpstreamDebug(url=url, page=params.page, error=f"{type(exc).__name__}: {exc}")
            )

        if not response.is_success:
            self._logger.warning("upstream_bad_status", url=url, status=response.status_code)
            return UpstreamResult.failed(
                UpstreamDebug(
                    url=url,
                    status=response.status_code,
                    page=params.page,
                    error=f"HTTP {response.status_code}",
                    body=response.text[:_DEBUG_BODY_LIMIT],
                )
            )

        try:
            payload: Any = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            self._logger.warning("upstream_malformed_payload", url=url)
            return UpstreamResult.failed(
                UpstreamDebug(
                    url=url,
                    status=response.status_code,
                    page=params.page,
                    error="malformed payload",
                    body=response.text[:_DEBUG_BODY_LIMIT],
                )
            )

        raw_events = payload.get("events") or []
        if not isinstance(raw_events, list):
            raw_events = []
        events = map_raw_events(raw_events)

        self._logger.info(
            "upstream_search",
            url=url,
            status=response.status_code,
            results=len(events),
        )
        return UpstreamResult.ok(
            events,
            UpstreamDebug(url=url, status=response.status_code, page=params.page),
        )

    def get_provider_name(self) -> str:
        return "seatgeek"

    def is_available(self) -> bool:
        return bool(self._client_id)
