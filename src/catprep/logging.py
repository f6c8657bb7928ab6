"""
Structured logging for the cat preprocessor.

mdBook reads the processed book from the preprocessor's stdout, so structlog
hands every event to a stdlib handler on stderr. Console rendering is the
default; JSON output is available for CI logs.

Examples:
    >>> from catprep.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.debug("subjects_resolved", count=3)

Tags:
    logging, structlog, catprep
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Prefix printed in front of every reported pipeline error
ERROR_PREFIX = "[cat-prep]"

_SERVICE_NAME = "cat-prep"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_format: bool = False,
    service: str = "cat-prep",
) -> None:
    """Configure structured logging for the preprocessor.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON lines, False for console output
        service: Service name to include in JSON logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if json_format:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
        shared_processors.append(_add_service_metadata)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def report_errors(logger: Any, errors: list[Exception], phase: str) -> None:
    """Log every accumulated error of a phase with the error prefix."""
    for error in errors:
        logger.error("phase_error", prefix=ERROR_PREFIX, phase=phase, error=str(error))


__all__ = [
    "ERROR_PREFIX",
    "configure_logging",
    "get_logger",
    "report_errors",
]
