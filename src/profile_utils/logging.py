"""Structured logging with structlog.

In production:
- JSON lines on stdout for log aggregation

In development (localhost):
- Uses structlog's colorized console output
- Easier to read while debugging a search
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "silent": logging.CRITICAL,
}


@lru_cache(maxsize=1)
def _configure_logging(*, is_production: bool, min_level: int) -> None:
    """Configure structlog for the SDK.

    Args:
        is_production: Use JSON output for production, colorized for dev.
        min_level: Lowest level that is emitted.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_production:
        structlog.configure(
            processors=[
                *shared_processors,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
    else:
        structlog.configure(
            processors=[
                *shared_processors,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for a specific module.

    Args:
        name: Logger name (typically module name like "profile_sdk.api").

    Returns:
        Configured structlog logger with service context.

    Example:
        >>> log = get_logger("profile_sdk.profile.sdk")
        >>> log.info("search_submitted", request_id="abc123")
    """
    # Lazy configuration on first logger access
    from profile_utils.settings import get_settings

    settings = get_settings()
    _configure_logging(
        is_production=settings.is_production,
        min_level=_LEVELS[settings.log_level],
    )

    return structlog.get_logger(service=name)
