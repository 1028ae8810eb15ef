"""
Request tracing middleware.

CorrelationMiddleware binds the caller's X-Correlation-ID (or a new one)
for the lifetime of the request and echoes it on the response.
RequestLoggingMiddleware writes one access line per request with status
and duration; health checks are logged at DEBUG so load balancer polling
does not drown the chat traffic.

CorrelationMiddleware must be added last so it wraps the logging one and
the access line carries the ID.

Dependencies: starlette
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mini_perplexity.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_PREFIXES = ("/api/health",)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        path = request.url.path
        request_line = f"{request.method} {path}"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request_line} - unhandled {type(e).__name__}",
                extra={"path": path, "process_time_ms": _elapsed_ms(started)},
            )
            raise

        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIXES) else logging.INFO
        logger.log(
            level,
            f"{request_line} - {response.status_code}",
            extra={
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind and echo the request correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
