"""Models for search queries, upstream call results and cached query state."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.event import EnrichedEvent, NormalizedEvent

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class EventQuery(BaseModel):
    """A user's search: where, what they like, and optionally which day."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(default="", description="'City, ST' or 'City ST'.")
    interests: list[str] = Field(default_factory=list)
    date: str | None = Field(default=None, description="ISO date YYYY-MM-DD.")

    @field_validator("location", mode="before")
    @classmethod
    def _location_str(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("interests", mode="before")
    @classmethod
    def _interests_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _valid_date(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        if not _ISO_DATE.fullmatch(text):
            raise ValueError("date must be YYYY-MM-DD")
        datetime.strptime(text, "%Y-%m-%d")  # rejects 2026-02-30
        return text


class FetchMode(IntEnum):
    """Upstream filter configurations, tried in order until one yields results."""

    CITY_AND_KEYWORDS = 0
    CITY_ONLY = 1
    DATE_ONLY = 2

    @property
    def use_city(self) -> bool:
        return self is not FetchMode.DATE_ONLY

    @property
    def use_keywords(self) -> bool:
        return self is FetchMode.CITY_AND_KEYWORDS


class SearchParams(BaseModel):
    """Provider-neutral description of one upstream search call."""

    model_config = ConfigDict(frozen=True)

    city: str = ""
    state: str = ""
    start: str | None = None
    end: str | None = None
    keywords: str = ""
    page: int = Field(default=1, ge=1)


class UpstreamStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class UpstreamDebug(BaseModel):
    """Diagnostics for the most recent upstream call of a query."""

    model_config = ConfigDict(frozen=True)

    url: str
    status: int | None = Field(default=None, description="HTTP status, None if no response.")
    mode: int | None = None
    page: int | None = None
    error: str | None = None
    body: str | None = Field(default=None, description="Truncated body of a failed response.")


class UpstreamResult(BaseModel):
    """Outcome of one upstream search: results, a genuinely empty page, or a failure."""

    model_config = ConfigDict(frozen=True)

    status: UpstreamStatus
    events: list[NormalizedEvent] = Field(default_factory=list)
    debug: UpstreamDebug

    @property
    def has_items(self) -> bool:
        return self.status is UpstreamStatus.OK and bool(self.events)

    @classmethod
    def ok(cls, events: list[NormalizedEvent], debug: UpstreamDebug) -> UpstreamResult:
        status = UpstreamStatus.OK if events else UpstreamStatus.EMPTY
        return cls(status=status, events=events, debug=debug)

    @classmethod
    def failed(cls, debug: UpstreamDebug) -> UpstreamResult:
        return cls(status=UpstreamStatus.FAILED, events=[], debug=debug)


class CacheEntry(BaseModel):
    """Accumulated state for one canonical query.

    ``page`` is the next page to fetch.  ``mode`` stays ``None`` until a fetch
    mode has produced a non-empty page.  ``done`` means the upstream source
    is exhausted for this query; no further calls are made until the entry is
    invalidated or expires.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    items: list[EnrichedEvent] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    mode: FetchMode | None = None
    done: bool = False
    debug: UpstreamDebug | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
