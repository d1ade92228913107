"""Structured logging setup with structlog.

Two renderers: "json" lines for pipelines that collect logs, "console"
for interactive CLI use. Everything goes to stderr by default so that
`bbands compute --format json` keeps stdout machine-readable.

The data file and indicator parameters of the current run are bound
with bind_series_context and merged into every entry.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from bbands.config import AppConfig


def _renderer(log_format: str, stream: TextIO) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    isatty = getattr(stream, "isatty", None)
    return structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """Route structlog through a single stdlib handler on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "console".
        stream: Destination; stderr when omitted.
    """
    out = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format, out),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def setup_logging_from_config(config: AppConfig, stream: TextIO | None = None) -> None:
    """Apply the log level and format from AppConfig."""
    setup_logging(level=config.log_level, log_format=config.log_format, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structlog logger."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_series_context(data_path: str, **settings: object) -> None:
    """Attach the data file and indicator parameters to every later log entry."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(data_path=data_path, **settings)
