"""Shared utilities: error hierarchy, structured logging and concurrency helpers."""

from src.utils.concurrency import KeyedLocks, WorkerPool
from src.utils.errors import (
    ConfigurationError,
    LLMError,
    RateLimitError,
    ShowFinderError,
    SummarizerError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "KeyedLocks",
    "LLMError",
    "RateLimitError",
    "ShowFinderError",
    "SummarizerError",
    "WorkerPool",
    "configure_logging",
    "get_logger",
]
