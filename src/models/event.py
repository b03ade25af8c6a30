"""Pydantic v2 models for event listings at each pipeline stage.

    SeatGeekEvent   -- raw upstream record, parsed leniently
    NormalizedEvent -- flat record built by ``event_mapper.map_raw_event``
    DedupedEvent    -- + ``showings`` / ``otherStartTimes`` from the merge engine
    EnrichedEvent   -- + ``snippet`` from the enrichment stage

The pipeline models are frozen; stages build new instances instead of
mutating.  They serialize with camelCase aliases (``startTime``,
``otherStartTimes``) because that is the JSON contract of ``POST /events``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNTITLED_EVENT = "Untitled event"


# ---------------------------------------------------------------------------
# Raw upstream records (SeatGeek /2/events)
# ---------------------------------------------------------------------------


class SeatGeekVenue(BaseModel):
    """Venue block of a SeatGeek event; only the display fields are kept."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    city: str | None = None
    state: str | None = None


class SeatGeekPerformer(BaseModel):
    """A performer on a SeatGeek event."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    image: str | None = None


class SeatGeekEvent(BaseModel):
    """A single element of the SeatGeek ``events`` array.

    Unknown keys are ignored.  ``performers: null`` is read as an empty list.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    venue: SeatGeekVenue | None = None
    datetime_local: str | None = None
    url: str | None = None
    performers: list[SeatGeekPerformer] = Field(default_factory=list)
    image: str | None = None

    @field_validator("performers", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------


class _EventModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NormalizedEvent(_EventModel):
    """One showing of an event in the shape the rest of the pipeline uses."""

    title: str = Field(default=UNTITLED_EVENT, description="Event title.")
    start_time: str | None = Field(
        default=None,
        description="Local start time, ISO format without offset (YYYY-MM-DDTHH:MM:SS).",
    )
    venue: str | None = Field(
        default=None, description="Venue name, city and state joined with ', '."
    )
    url: str | None = Field(default=None, description="Ticketing / detail page.")
    image: str | None = Field(default=None, description="Performer or event image URL.")


class DedupedEvent(NormalizedEvent):
    """All showings of one (title, venue) pair collapsed into a single record.

    ``start_time`` is the earliest known showing; every other distinct time
    is listed once in ``other_start_times`` in the order it was first seen.
    """

    showings: int = Field(default=1, ge=1, description="Raw showings merged into this record.")
    other_start_times: list[str] = Field(
        default_factory=list,
        description="Distinct start times other than start_time, first-seen order.",
    )


class EnrichedEvent(DedupedEvent):
    """A deduplicated event with its display snippet attached (once)."""

    snippet: str | None = Field(default=None, description="Short descriptive blurb.")
