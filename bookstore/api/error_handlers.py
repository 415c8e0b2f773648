"""Error Handlers — global exception handlers for the catalog API.

Invariants:
    - BookStoreError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - Anything else escapes to CorrelationIdMiddleware, which answers the
      uniform 500 envelope (internal_error_response) while the correlation
      id is still bound

Design Decisions:
    - Two handler layers here: domain (BookStoreError) and validation (Pydantic)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookstore.core.errors import BookStoreError, ErrorSeverity
from bookstore.infrastructure.observability import get_correlation_id

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookstore_error_handler(app)
    _register_validation_error_handler(app)


def internal_error_response(trace_id: str | None) -> JSONResponse:
    """The one body every unexpected failure produces."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "type": "https://httpstatuses.com/500",
            "title": "An unexpected error occurred.",
            "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "traceId": trace_id,
        },
    )


def _register_bookstore_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BookStoreError)
    async def bookstore_error_handler(request: Request, exc: BookStoreError):
        """Handle all catalog domain/infrastructure errors."""
        exc.context.correlation_id = exc.context.correlation_id or get_correlation_id()
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"BookStoreError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
