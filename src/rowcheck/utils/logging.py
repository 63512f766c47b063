"""Structured logging setup with structlog."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from rowcheck.config.settings import LoggingSettings, get_settings


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog with the level and renderer from LoggingSettings.

    ``json`` renders one JSON object per event; ``console`` uses structlog's
    dev renderer. Events go to stderr so stdout stays free for
    command output. Safe to call more than once.
    """
    settings = settings or get_settings().logging
    level = logging.getLevelName(settings.log_level)
    renderer: structlog.types.Processor
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
