"""Canonical query keys and location/date helpers.

Two requests that differ only in location casing, interest order or
interest casing must land on the same cache entry, so the key is built
from normalized parts only.
"""

from __future__ import annotations

from typing import Iterable

from src.models.query import EventQuery

_KEY_SEPARATOR = "|"
_INTEREST_SEPARATOR = ","


def normalize_location(location: str | None) -> str:
    return (location or "").strip().lower()


def normalize_interests(interests: Iterable[str] | None) -> list[str]:
    """Trim and lowercase each interest, drop blanks, and sort."""
    cleaned = (str(i).strip().lower() for i in (interests or []))
    return sorted(i for i in cleaned if i)


def build_query_key(
    location: str | None,
    interests: Iterable[str] | None,
    date: str | None,
) -> str:
    """Return the canonical cache key for a (location, interests, date) triple.

    >>> build_query_key("Dallas, TX", ["Theatre", "Music"], None)
    'dallas, tx|music,theatre|'
    """
    return _KEY_SEPARATOR.join(
        [
            normalize_location(location),
            _INTEREST_SEPARATOR.join(normalize_interests(interests)),
            (date or "").strip(),
        ]
    )


def query_key_for(query: EventQuery) -> str:
    return build_query_key(query.location, query.interests, query.date)


def parse_location(location: str | None) -> tuple[str, str]:
    """Split a free-form location into ``(city, state)``.

    ``"Dallas, TX"`` and ``"Dallas TX"`` both give ``("Dallas", "TX")``.
    Without a comma, the last word is taken as the state only when there is
    more than one word; ``"Austin"`` gives ``("Austin", "")``.
    """
    city_raw, _, state_raw = (location or "").partition(",")
    city = city_raw.strip()
    state = state_raw.split(",")[0].strip()

    if not state and " " in city:
        head, _, tail = city.rpartition(" ")
        city, state = head.strip(), tail.strip()

    return city, state


def day_bounds(date: str) -> tuple[str, str]:
    """Local-time bounds covering the whole of *date*."""
    return f"{date}T00:00:00", f"{date}T23:59:59"


def keyword_query(interests: Iterable[str] | None) -> str:
    """Free-text keyword string sent upstream: interests joined by spaces."""
    return " ".join(str(i) for i in (interests or [])).strip()
