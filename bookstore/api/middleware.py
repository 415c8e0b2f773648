"""Correlation-Id Middleware — request tracing, request logging and last-resort 500s.

Invariants:
    - X-Correlation-Id is reused when it parses as a UUID, otherwise replaced
      by a fresh one
    - The id is bound to correlation_id_var for the whole request and echoed
      on every response, including the uniform 500
    - Unhandled exceptions never escape: they become the uniform 500 envelope
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bookstore.api.error_handlers import internal_error_response
from bookstore.infrastructure.observability import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-Id"


def resolve_correlation_id(raw: str | None) -> str:
    if raw:
        try:
            return str(uuid.UUID(raw))
        except ValueError:
            pass
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
        token = correlation_id_var.set(correlation_id)
        start_time = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    f"Unhandled exception on {request.url.path}: {exc}",
                    exc_info=True,
                    extra={"path": request.url.path, "method": request.method},
                )
                response = internal_error_response(correlation_id)

            response.headers[CORRELATION_HEADER] = correlation_id
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} [{response.status_code}]",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return response
        finally:
            correlation_id_var.reset(token)
