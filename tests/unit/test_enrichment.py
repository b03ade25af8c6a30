"""Unit tests for the summarizer and the enrichment stage."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.models.event import DedupedEvent, EnrichedEvent
from src.services.enrichment import EnrichmentService, fallback_snippet
from src.services.summarizer import LLMSummarizer, clip_text
from src.utils.errors import LLMError, RateLimitError, SummarizerError


def _deduped(title: str, venue: str | None = "Hall", showings: int = 1) -> DedupedEvent:
    return DedupedEvent(
        title=title, venue=venue, start_time="2026-01-06T19:00:00", showings=showings
    )


# ======================================================================
# Summarizer
# ======================================================================


class TestClipText:
    def test_short_text_unchanged(self) -> None:
        assert clip_text("  A   fun   night. ", 50) == "A fun night."

    def test_long_text_is_cut_with_ellipsis(self) -> None:
        clipped = clip_text("word " * 100, 40)
        assert len(clipped) <= 40
        assert clipped.endswith("…")


class TestLLMSummarizer:
    def test_prompt_lists_event_details(self) -> None:
        prompt = LLMSummarizer.build_prompt(_deduped("Show A", showings=3))
        assert "Title: Show A" in prompt
        assert "Venue: Hall" in prompt
        assert "Showings: 3" in prompt

    def test_prompt_omits_single_showing(self) -> None:
        assert "Showings" not in LLMSummarizer.build_prompt(_deduped("Show A"))

    @pytest.mark.asyncio
    async def test_returns_cleaned_reply(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value='  "A great night out."  ')
        summarizer = LLMSummarizer(mock_llm, temperature=0.3, max_tokens=50)
        assert await summarizer.summarize(_deduped("Show A")) == "A great night out."
        kwargs = mock_llm.complete.call_args.kwargs
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 50

    @pytest.mark.asyncio
    async def test_llm_error_becomes_summarizer_error(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(side_effect=LLMError("rate limited", provider_name="mock-llm"))
        with pytest.raises(SummarizerError) as exc_info:
            await LLMSummarizer(mock_llm).summarize(_deduped("Show A"))
        assert exc_info.value.provider_name == "mock-llm"

    @pytest.mark.asyncio
    async def test_rate_limit_passes_through(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(side_effect=RateLimitError(provider_name="mock-llm"))
        with pytest.raises(RateLimitError):
            await LLMSummarizer(mock_llm).summarize(_deduped("Show A"))

    @pytest.mark.asyncio
    async def test_blank_reply_is_an_error(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="   ")
        with pytest.raises(SummarizerError):
            await LLMSummarizer(mock_llm).summarize(_deduped("Show A"))


# ======================================================================
# EnrichmentService
# ======================================================================


class TestFallbackSnippet:
    def test_with_venue(self) -> None:
        assert fallback_snippet(_deduped("Show A")) == "Show A at Hall."

    def test_without_venue(self) -> None:
        assert fallback_snippet(_deduped("Show A", venue=None)) == "Show A."


class TestEnrichmentService:
    @pytest.mark.asyncio
    async def test_no_summarizer_uses_fallback(self) -> None:
        service = EnrichmentService(summarizer=None)
        result = await service.enrich([_deduped("A"), _deduped("B", venue=None)])
        assert [e.snippet for e in result] == ["A at Hall.", "B."]
        assert all(isinstance(e, EnrichedEvent) for e in result)

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self, mock_llm: MagicMock) -> None:
        async def complete(system_prompt: str, user_prompt: str, **kwargs) -> str:
            if "Title: B" in user_prompt:
                raise LLMError("boom", provider_name="mock-llm")
            return "Blurb"

        mock_llm.complete = AsyncMock(side_effect=complete)
        service = EnrichmentService(LLMSummarizer(mock_llm), concurrency=2)
        result = await service.enrich([_deduped("A"), _deduped("B"), _deduped("C")])
        assert [e.snippet for e in result] == ["Blurb", "B at Hall.", "Blurb"]

    @pytest.mark.asyncio
    async def test_rate_limit_falls_back_and_is_logged_apart(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(
            side_effect=RateLimitError("429 from provider", provider_name="mock-llm")
        )
        service = EnrichmentService(LLMSummarizer(mock_llm))
        with patch("src.services.enrichment._logger") as logger:
            [event] = await service.enrich([_deduped("A")])

        assert event.snippet == "A at Hall."
        logger.warning.assert_called_once_with(
            "summary_rate_limited",
            title="A",
            provider="mock-llm",
            error="429 from provider",
        )

    @pytest.mark.asyncio
    async def test_unexpected_exception_falls_back(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(side_effect=RuntimeError("socket closed"))
        service = EnrichmentService(LLMSummarizer(mock_llm))
        [event] = await service.enrich([_deduped("A")])
        assert event.snippet == "A at Hall."

    @pytest.mark.asyncio
    async def test_existing_snippets_pass_through(self, mock_llm: MagicMock) -> None:
        done = EnrichedEvent(title="Old", venue="Hall", snippet="Cached blurb")
        service = EnrichmentService(LLMSummarizer(mock_llm))
        result = await service.enrich([done, _deduped("New")])
        assert [e.snippet for e in result] == ["Cached blurb", "Short blurb"]
        assert mock_llm.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_nothing_pending_makes_no_calls(self, mock_llm: MagicMock) -> None:
        done = [EnrichedEvent(title="X", snippet="s")]
        service = EnrichmentService(LLMSummarizer(mock_llm))
        assert await service.enrich(done) == done
        mock_llm.complete.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrency", [1, 5])
    async def test_order_preserved_with_uneven_latency(
        self, mock_llm: MagicMock, concurrency: int
    ) -> None:
        async def complete(system_prompt: str, user_prompt: str, **kwargs) -> str:
            title = user_prompt.splitlines()[0].removeprefix("Title: ")
            await asyncio.sleep(0.01 if title == "E0" else 0)
            return f"About {title}"

        mock_llm.complete = AsyncMock(side_effect=complete)
        service = EnrichmentService(LLMSummarizer(mock_llm), concurrency=concurrency)
        events = [_deduped(f"E{i}") for i in range(10)]
        result = await service.enrich(events)
        assert [e.snippet for e in result] == [f"About E{i}" for i in range(10)]
        assert [e.title for e in result] == [e.title for e in events]

    def test_concurrency_property(self) -> None:
        assert EnrichmentService(None, concurrency=7).concurrency == 7
