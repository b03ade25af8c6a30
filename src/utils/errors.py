"""Custom exception hierarchy for ShowFinder.

All application exceptions inherit from :class:`ShowFinderError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "seatgeek", "openai", "anthropic") caused the failure.

The hierarchy is organized by pipeline stage:

    ShowFinderError  (base -- catch-all for any ShowFinder error)
    +-- ConfigurationError       (startup / missing credentials)
    +-- LLMError                 (any LLM API call failure)
    |   +-- SummarizerError      (snippet generation for one event failed)
    +-- RateLimitError           (LLM provider answered 429)

Only :class:`ConfigurationError` is meant to reach the HTTP layer.  Upstream
failures never raise: the search provider returns a ``FAILED`` result, which
reads as an empty page.  Summarizer failures and rate limits are recovered per
event with the fallback snippet.
"""


class ShowFinderError(Exception):
    """Base exception for all ShowFinder errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[seatgeek] HTTP 403``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(ShowFinderError):
    """Raised when configuration is invalid or a required credential is missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class RateLimitError(ShowFinderError):
    """Raised by the LLM adapters when the provider rejects a call with 429.

    Kept apart from :class:`LLMError` so the enrichment stage can log rate
    limiting on its own instead of as a generic summary failure.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(ShowFinderError):
    """Raised when an LLM API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SummarizerError(LLMError):
    """Raised when a snippet could not be produced for a single event.

    The enrichment stage catches this per event and substitutes the
    deterministic fallback text; it never aborts a batch.
    """

    def __init__(
        self,
        message: str = "Event summary generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
