"""
Process-wide logging setup.

One stdout handler on the root logger; each line carries the request's
correlation ID. Called from the FastAPI lifespan and the create_tables
script, both of which may run more than once in a process (tests,
reloads), so existing root handlers are replaced, not stacked.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from mini_perplexity.observability.correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Vendor clients that log every HTTP exchange at INFO
NOISY_LOGGERS = {
    "urllib3": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "google_genai": logging.WARNING,
    "passlib": logging.ERROR,
}


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler on the root logger.

    Args:
        level: Root level name (DEBUG, INFO, ...), any case
    """
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)
