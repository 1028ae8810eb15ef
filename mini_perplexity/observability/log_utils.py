"""
Structured logging helpers.

Questions, answers and search payloads can be long and may carry user
text, so context values are reduced to short summaries before they are
attached to a log record.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from typing import Any

from pydantic import BaseModel


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a context value for a log record.

    Sequences and mappings are summarized by size and pydantic models by
    class name; everything else goes through str() and is cut at
    max_length.

    Args:
        value: Value to render
        max_length: Longest string kept before truncation

    Returns:
        str: Loggable text, never raises
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        elif isinstance(value, BaseModel):
            text = f"<{type(value).__name__}>"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _context(**context: Any) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log message with context values attached as record attributes."""
    logger.log(level, message, extra=_context(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log a handled exception with its traceback.

    Args:
        logger: Logger instance
        message: Log message
        exc: The exception being swallowed or translated
        **context: Identifiers that locate the failure (session_id, ...)
    """
    extra = _context(**context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
