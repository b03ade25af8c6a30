"""LLM-backed one-line event summaries.

Wraps an :class:`ILLMProvider` and turns API errors and empty or
whitespace-only replies into :class:`SummarizerError`.  A provider
:class:`RateLimitError` passes through unchanged.
"""

from __future__ import annotations

from src.interfaces.llm_provider import ILLMProvider
from src.models.event import DedupedEvent
from src.utils.errors import LLMError, SummarizerError

_SYSTEM_PROMPT = (
    "You write blurbs for a local events listing. Given an event, reply with "
    "one friendly sentence telling a reader what to expect. Use only the "
    "details provided; do not invent performers, prices or descriptions. "
    "No quotes, hashtags or emoji."
)


def clip_text(text: str, max_chars: int) -> str:
    """Collapse whitespace and cut *text* to *max_chars*, ending with an ellipsis if cut."""
    cleaned = " ".join(text.split())
    if len(cleaned) <= max_chars:
        return cleaned
    cut = cleaned[: max_chars - 1].rstrip()
    space = cut.rfind(" ")
    if space > max_chars // 2:
        cut = cut[:space]
    return cut.rstrip(" ,;:-") + "…"


class LLMSummarizer:
    """Produces a short snippet for one event.

    Parameters
    ----------
    llm:
        Completion backend.
    max_chars:
        Upper bound on the returned snippet length.
    temperature, max_tokens:
        Passed through to :meth:`ILLMProvider.complete`.
    """

    def __init__(
        self,
        llm: ILLMProvider,
        max_chars: int = 200,
        temperature: float = 0.7,
        max_tokens: int = 120,
    ) -> None:
        self._llm = llm
        self._max_chars = max_chars
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider_name(self) -> str:
        return self._llm.get_provider_name()

    @staticmethod
    def build_prompt(event: DedupedEvent) -> str:
        lines = [f"Title: {event.title}"]
        if event.venue:
            lines.append(f"Venue: {event.venue}")
        if event.start_time:
            lines.append(f"Starts: {event.start_time}")
        if event.showings > 1:
            lines.append(f"Showings: {event.showings}")
        lines.append("Keep it under 30 words.")
        return "\n".join(lines)

    async def summarize(self, event: DedupedEvent) -> str:
        try:
            reply = await self._llm.complete(
                system_prompt=_SYSTEM_PROMPT,
                user_prompt=self.build_prompt(event),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as exc:
            raise SummarizerError(
                message=f"Summary failed for '{event.title}': {exc.message}",
                provider_name=exc.provider_name,
            ) from exc

        snippet = clip_text(reply.strip().strip('"'), self._max_chars)
        if not snippet:
            raise SummarizerError(
                message=f"Empty summary for '{event.title}'",
                provider_name=self.provider_name,
            )
        return snippet
