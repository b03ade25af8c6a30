"""Upstream event search adapters implementing IEventSearchProvider."""

from src.providers.event.seatgeek_provider import SeatGeekProvider

__all__ = ["SeatGeekProvider"]
