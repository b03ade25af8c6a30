"""Attach a display snippet to every deduplicated event.

Events that already carry a snippet pass through untouched; the rest are
summarized through a :class:`WorkerPool` with a fixed number of workers.
Output order is input order.  When the summarizer is missing or fails for
an event, that event alone gets the deterministic fallback text.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from src.models.event import DedupedEvent, EnrichedEvent
from src.services.summarizer import LLMSummarizer
from src.utils.concurrency import WorkerPool
from src.utils.errors import RateLimitError, SummarizerError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def fallback_snippet(event: DedupedEvent) -> str:
    """``"{title} at {venue}."``, or ``"{title}."`` when the venue is unknown."""
    if event.venue:
        return f"{event.title} at {event.venue}."
    return f"{event.title}."


def _as_enriched(event: DedupedEvent, snippet: str | None) -> EnrichedEvent:
    data = event.model_dump()
    data["snippet"] = snippet
    return EnrichedEvent.model_validate(data)


class EnrichmentService:
    """Fills in missing snippets with bounded concurrency.

    Parameters
    ----------
    summarizer:
        LLM summarizer, or ``None`` to use the fallback text for everything.
    concurrency:
        Maximum number of summaries in flight.
    """

    def __init__(self, summarizer: LLMSummarizer | None, concurrency: int = 5) -> None:
        self._summarizer = summarizer
        self._pool: WorkerPool[DedupedEvent, EnrichedEvent] = WorkerPool(concurrency)

    @property
    def concurrency(self) -> int:
        return self._pool.concurrency

    async def _enrich_one(self, event: DedupedEvent) -> EnrichedEvent:
        if isinstance(event, EnrichedEvent) and event.snippet:
            return event

        if self._summarizer is None:
            return _as_enriched(event, fallback_snippet(event))

        try:
            snippet = await self._summarizer.summarize(event)
        except RateLimitError as exc:
            _logger.warning(
                "summary_rate_limited",
                title=event.title,
                provider=exc.provider_name,
                error=exc.message,
            )
            snippet = fallback_snippet(event)
        except SummarizerError as exc:
            _logger.warning(
                "summary_failed",
                title=event.title,
                provider=exc.provider_name,
                error=exc.message,
            )
            snippet = fallback_snippet(event)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "summary_failed",
                title=event.title,
                error=f"{type(exc).__name__}: {exc}",
            )
            snippet = fallback_snippet(event)
        return _as_enriched(event, snippet)

    async def enrich(self, events: Sequence[DedupedEvent]) -> list[EnrichedEvent]:
        """Return *events* with snippets, same length and order as the input."""
        pending = sum(
            1 for e in events if not (isinstance(e, EnrichedEvent) and e.snippet)
        )
        if pending == 0:
            return list(events)  # type: ignore[arg-type]

        _logger.info(
            "enrichment_started",
            events=len(events),
            pending=pending,
            concurrency=self.concurrency,
            summarizer=None if self._summarizer is None else self._summarizer.provider_name,
        )
        return await self._pool.map(self._enrich_one, events)
