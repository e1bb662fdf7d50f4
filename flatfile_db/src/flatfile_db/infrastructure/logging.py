"""Structured logging for the database.

Events go to stderr, one per line, so rows printed on stdout by callers
stay machine-readable. Loggers are created lazily: module-level loggers
made at import time pick up whatever ``setup_logging`` configures later.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import Processor

LOG_FORMATS = ("json", "console")


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return number


def _renderer(log_format: str, stream: TextIO) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=stream.isatty())
    raise ValueError(f"Unknown log format: {log_format!r} (expected one of {LOG_FORMATS})")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        stream: Output stream (default stderr)

    Raises:
        ValueError: If the level or format is not recognised
    """
    stream = stream or sys.stderr
    log_level = _level_number(level)
    renderer = _renderer(log_format, stream)

    # Libraries that log through the standard library share the stream
    logging.basicConfig(format="%(message)s", stream=stream, level=log_level, force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Return a lazy logger carrying ``name`` and ``initial_context``.

    The print logger factory drops logger names, so the name is kept in
    the event itself under ``logger``.
    """
    if name is not None:
        initial_context = {"logger": name, **initial_context}
    return BoundLoggerLazyProxy(None, initial_values=initial_context)
