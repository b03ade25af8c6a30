"""Map raw SeatGeek events onto :class:`NormalizedEvent`.

Image selection is an explicit, ordered list of extraction strategies.
Each strategy returns an image URL or ``None``; the first non-empty value
wins and later strategies are not evaluated.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog
from pydantic import ValidationError

from src.models.event import UNTITLED_EVENT, NormalizedEvent, SeatGeekEvent, SeatGeekVenue
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

ImageStrategy = Callable[[SeatGeekEvent], "str | None"]


def _first_performer_with_image(event: SeatGeekEvent) -> str | None:
    for performer in event.performers:
        if performer.image:
            return performer.image
    return None


def _first_performer_image(event: SeatGeekEvent) -> str | None:
    if event.performers:
        return event.performers[0].image
    return None


def _event_image(event: SeatGeekEvent) -> str | None:
    return event.image


IMAGE_STRATEGIES: tuple[ImageStrategy, ...] = (
    _first_performer_with_image,
    _first_performer_image,
    _event_image,
)


def select_image(
    event: SeatGeekEvent,
    strategies: tuple[ImageStrategy, ...] = IMAGE_STRATEGIES,
) -> str | None:
    for strategy in strategies:
        image = strategy(event)
        if image:
            return image
    return None


def format_venue(venue: SeatGeekVenue | None) -> str | None:
    """Join the non-empty venue name, city and state with ``", "``."""
    if venue is None:
        return None
    parts = [p for p in (venue.name, venue.city, venue.state) if p]
    return ", ".join(parts) or None


def map_raw_event(event: SeatGeekEvent) -> NormalizedEvent:
    return NormalizedEvent(
        title=event.title or UNTITLED_EVENT,
        start_time=event.datetime_local or None,
        venue=format_venue(event.venue),
        url=event.url or None,
        image=select_image(event),
    )


def map_raw_events(raw_events: list[Any]) -> list[NormalizedEvent]:
    """Parse and normalize a raw ``events`` array, skipping unreadable items."""
    events: list[NormalizedEvent] = []
    for raw in raw_events:
        if not isinstance(raw, dict):
            _logger.warning("raw_event_skipped", reason="not an object", item=str(raw)[:200])
            continue
        try:
            parsed = SeatGeekEvent.model_validate(raw)
        except ValidationError as exc:
            _logger.warning(
                "raw_event_skipped",
                reason="validation failed",
                errors=exc.error_count(),
                item=str(raw)[:200],
            )
            continue
        events.append(map_raw_event(parsed))
    return events
