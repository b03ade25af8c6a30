"""Collapse repeated showings of the same event into one record.

Events are grouped by lowercase-trimmed title plus lowercase-trimmed venue.
Within a group the earliest start time is the representative ``start_time``
and every other distinct time is kept once in ``other_start_times``.

Input may mix raw :class:`NormalizedEvent` showings with records that were
already merged (cached output from an earlier page).  A merged record
contributes its ``showings`` count and all of its start times, so running
the merge over ``previous_output + new_items`` gives the same result as
merging every original showing in order, and re-running it over its own
output changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from src.models.event import DedupedEvent, EnrichedEvent, NormalizedEvent

DedupKey = tuple[str, str]


def dedup_key(event: NormalizedEvent) -> DedupKey:
    """Lowercase-trimmed ``(title, venue)``; a missing venue is ``""``."""
    title = (event.title or "").strip().lower()
    venue = (event.venue or "").strip().lower()
    return title, venue


def _start_times(event: NormalizedEvent) -> list[str]:
    """All start times an input record stands for, representative first."""
    times = [event.start_time] if event.start_time else []
    if isinstance(event, DedupedEvent):
        times.extend(t for t in event.other_start_times if t)
    return times


@dataclass
class _Group:
    first: NormalizedEvent
    start_time: str | None
    showings: int
    other_start_times: list[str] = field(default_factory=list)
    snippet: str | None = None

    def add_time(self, incoming: str | None) -> None:
        current = self.start_time
        if not incoming or incoming == current:
            return
        if current is None:
            self.start_time = incoming
            if incoming in self.other_start_times:
                self.other_start_times.remove(incoming)
            return
        if incoming < current:
            if current not in self.other_start_times:
                self.other_start_times.append(current)
            if incoming in self.other_start_times:
                self.other_start_times.remove(incoming)
            self.start_time = incoming
        elif incoming not in self.other_start_times:
            self.other_start_times.append(incoming)

    def build(self) -> EnrichedEvent:
        return EnrichedEvent(
            title=self.first.title,
            start_time=self.start_time,
            venue=self.first.venue,
            url=self.first.url,
            image=self.first.image,
            showings=self.showings,
            other_start_times=list(self.other_start_times),
            snippet=self.snippet,
        )


def _showings(event: NormalizedEvent) -> int:
    return event.showings if isinstance(event, DedupedEvent) else 1


def _snippet(event: NormalizedEvent) -> str | None:
    return event.snippet if isinstance(event, EnrichedEvent) else None


def dedupe_events(events: Iterable[NormalizedEvent]) -> list[EnrichedEvent]:
    """Merge showings that share a dedup key, preserving first-seen group order.

    Parameters
    ----------
    events:
        Raw showings and/or previously merged records, in order.

    Returns
    -------
    list[EnrichedEvent]
        One record per distinct (title, venue).  Title, venue, url and image
        come from the first record of the group; a snippet already present
        on any member is kept (first one wins).
    """
    groups: dict[DedupKey, _Group] = {}

    for event in events:
        key = dedup_key(event)
        times = _start_times(event)
        group = groups.get(key)

        if group is None:
            group = _Group(
                first=event,
                start_time=times[0] if times else None,
                showings=_showings(event),
                snippet=_snippet(event),
            )
            groups[key] = group
            for t in times[1:]:
                group.add_time(t)
            continue

        group.showings += _showings(event)
        for t in times:
            group.add_time(t)
        if group.snippet is None:
            group.snippet = _snippet(event)

    return [group.build() for group in groups.values()]
