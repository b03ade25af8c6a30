"""LLM provider adapters used to write event snippets.

    - OpenAILLMProvider    -- gpt-4o-mini by default, or any OpenAI-compatible API
    - AnthropicLLMProvider -- Claude via the Messages API

main.py picks the first provider with a configured key (Anthropic, then
OpenAI).  With neither key set there is no LLM and every event gets the
deterministic fallback snippet.
"""

from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["AnthropicLLMProvider", "OpenAILLMProvider"]
