"""Public interface definitions for the external services ShowFinder uses.

Every external API is reached through one of the abstract base classes in
this package.  Concrete adapters live in ``src/providers/`` and are wired
together in ``src/main.py``; tests inject fakes that implement the same
contracts.

CONCRETE PROVIDER MAP:
    Interface              ->  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    IEventSearchProvider   ->  SeatGeekProvider
    ILLMProvider           ->  AnthropicLLMProvider, OpenAILLMProvider
    ICacheProvider         ->  MemoryCacheProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.event_search_provider import IEventSearchProvider
from src.interfaces.llm_provider import ILLMProvider

__all__ = [
    "ICacheProvider",
    "IEventSearchProvider",
    "ILLMProvider",
]
