"""Abstract base class for LLM service providers.

The enrichment stage only needs short text completions, so the contract
is a single ``complete`` call plus availability checks.  Implementations
wrap the OpenAI (or an OpenAI-compatible) API and the Anthropic API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: OpenAILLMProvider, AnthropicLLMProvider
# Located in: src/providers/llm/
class ILLMProvider(ABC):
    """Contract for text-completion backends."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 120,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The instruction message that sets the model's behaviour.
        user_prompt:
            The request itself, including the event details.
        temperature:
            Sampling temperature.
        max_tokens:
            Upper bound on response length in tokens.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        src.utils.errors.LLMError
            If the API call fails or returns no text.
        src.utils.errors.RateLimitError
            If the provider rejects the call with HTTP 429.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"openai"`` or ``"anthropic"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured (credentials present)."""
