"""Abstract base class for upstream event search providers.

A provider turns one :class:`~src.models.query.SearchParams` into one HTTP
call and reports the outcome as an :class:`~src.models.query.UpstreamResult`.
Providers never raise for transport or status failures: a failed call is a
``FAILED`` result carrying diagnostics, which the fetch orchestrator treats
like an empty page.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.query import SearchParams, UpstreamResult


# Concrete implementation: SeatGeekProvider (src/providers/event/)
class IEventSearchProvider(ABC):
    """Contract for event listing sources."""

    @abstractmethod
    async def search(self, params: SearchParams) -> UpstreamResult:
        """Fetch one page of events matching *params*.

        Returns
        -------
        UpstreamResult
            ``OK`` with normalized events, ``EMPTY`` when the page had no
            events, or ``FAILED`` on non-success status, transport error or
            unreadable payload.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"seatgeek"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
