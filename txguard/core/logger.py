"""
Structured logging for the decision firewall.

structlog with ISO timestamps, log level and a JSON (LOG_FORMAT=json) or
console renderer. Every module calls get_logger(__name__) and logs
snake_case event names with key/value context.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from txguard.core.config import settings

LOG_LEVEL_VALUE = getattr(logging, settings.log_level.upper(), logging.INFO)


def configure_structlog() -> None:
    """Configure structlog once: timestamp, level, renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format.strip().lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str | None = None) -> Any:
    """Return a bound structlog logger tagged with the module name."""
    if name:
        return structlog.get_logger(name).bind(module=name)
    return structlog.get_logger()
