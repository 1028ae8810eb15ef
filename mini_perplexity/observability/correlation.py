"""
Request correlation IDs.

The ID of the request being served lives in a ContextVar, so it follows
the request through awaits and threadpool hops (Tavily calls run via
run_in_threadpool, which copies the context) and shows up on every log
line written while answering it.

Dependencies: contextvars, uuid, logging
System role: Request tracing across service boundaries
"""

import logging
import uuid
from contextvars import ContextVar

NO_CORRELATION_ID = "-"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: ID received from the caller, a fresh UUID4 when empty

    Returns:
        str: The bound ID
    """
    bound = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(bound)
    return bound


def get_correlation_id() -> str:
    """Bound ID, or an empty string outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")


class CorrelationIdFilter(logging.Filter):
    """Adds `correlation_id` to each record so formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True
