"""API middleware: CORS, request logging and error handling.

Starlette middleware is a stack; in ``main.create_app`` the error handler
is added before the request logger, so requests flow

    client -> RequestLogging -> ErrorHandling -> route

and the logger sees the final status even when the error handler replaced
an exception with a JSON body.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import ErrorResponse
from src.utils.errors import ConfigurationError, ShowFinderError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware allowing GET/POST/DELETE from *allowed_origins* (default ``*``)."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code and duration.

    A short request id is bound into structlog's contextvars so every log
    line emitted while handling the request carries it.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=uuid.uuid4().hex[:12])

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )
            structlog.contextvars.clear_contextvars()


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn uncaught exceptions into :class:`ErrorResponse` JSON.

    ``ConfigurationError`` keeps its message (it is meant for the operator,
    e.g. "Server missing SEATGEEK_CLIENT_ID").  Anything else is logged
    with its traceback and reported as a generic server error.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ConfigurationError as exc:
            _logger.error(
                "configuration_error",
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=exc.message)
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
        except ShowFinderError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error="Server error", detail=type(exc).__name__)
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
        except Exception:
            _logger.exception("unhandled_error", path=str(request.url.path))
            body = ErrorResponse(error="Server error")
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
