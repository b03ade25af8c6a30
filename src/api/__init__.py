"""ShowFinder API layer: routes, schemas and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    CacheResetResponse,
    ErrorResponse,
    EventSearchRequest,
    EventSearchResponse,
    HealthResponse,
    VersionResponse,
)

__all__ = [
    "CacheResetResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "EventSearchRequest",
    "EventSearchResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "VersionResponse",
    "configure_cors",
    "router",
]
