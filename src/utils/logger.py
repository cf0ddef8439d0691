"""
Logging for the Reddit thing client.

The client, pager and rate limiter emit snake_case structlog events
(reddit_request, reddit_request_completed, reddit_request_failed,
listing_page_fetched, not_a_listing, rate_limit_wait). The CLI calls
setup_logging() once at startup; library users may configure structlog
themselves instead.
"""
import logging
import os
import sys
from typing import Any, Optional

import structlog


def setup_logging(level: str = "INFO") -> None:
    """
    Route client events to stderr, filtered at ``level``.

    Events are rendered as one JSON object per line, or with the colored
    console renderer when ENVIRONMENT=development. Every event carries an
    ISO UTC timestamp and its level. stdout is left to command output.

    Args:
        level: Log level name; unknown names fall back to INFO
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    is_dev = os.getenv("ENVIRONMENT", "production") == "development"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    # Logs go to stderr so CLI output on stdout stays clean
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Logger for a client module, bound lazily to the current structlog config.

    Example:
        >>> logger = get_logger("src.main")
        >>> logger.info("cli_starting", base_url="https://www.reddit.com", log_level="INFO")
    """
    return structlog.get_logger(name)


def log_request(
    path: str,
    duration_ms: float,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
    **extra: Any,
) -> None:
    """
    Log the outcome of one Reddit request in structured format.

    Args:
        path: Resource path that was requested
        duration_ms: Transport time in milliseconds (excludes rate limit wait)
        status_code: HTTP status, if a response was received
        error: Error message if the request failed
        **extra: Additional context to log

    Example:
        >>> log_request(path="r/python/new", duration_ms=312.4, status_code=200)
    """
    logger = get_logger("reddit_request")

    log_data = {
        "path": path,
        "duration_ms": round(duration_ms, 2),
        "status_code": status_code,
        "error": error,
        **extra,
    }

    if error:
        logger.error("reddit_request_failed", **log_data)
    else:
        logger.info("reddit_request_completed", **log_data)
