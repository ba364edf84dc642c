"""structlog setup shared by the store, the session and the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional, cast

import structlog
from structlog.types import Processor

from .config import LOG_LEVELS, get_settings
from .models import LayoutError


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog and stdlib logging.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to get_settings().log_level.
        log_format: "console" or "json". Defaults to get_settings().log_format.
    """
    if not level or not log_format:
        settings = get_settings()
        level = level or settings.log_level
        log_format = log_format or settings.log_format
    level = level.upper()
    if level not in LOG_LEVELS:
        raise LayoutError(f"unknown log level {level!r}")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout is reserved for CLI output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
        force=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
