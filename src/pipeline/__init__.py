"""Request-level orchestration of the event search."""

from src.pipeline.event_pipeline import EventSearchPipeline, EventSearchResult

__all__ = ["EventSearchPipeline", "EventSearchResult"]
