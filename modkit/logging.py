"""
Structured Logging.

This module wires structlog onto stdlib logging.

Key features:
- Console or JSON rendering
- Optional log file next to stdout
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    level: str = "info",
    format: str = "console",
    log_file: str | None = None,
) -> None:
    """
    Configure structlog and stdlib logging.

    Call once at host startup, before any modules are loaded.

    Args:
        level: One of debug, info, warning, error, critical
        format: "console" for human-readable output, "json" for structured logs
        log_file: Optional path to write logs to in addition to stdout
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(level.upper())


def get_logger(name: str, **initial_values: Any) -> Any:
    """
    Return a structlog logger for *name*.

    Args:
        name: Logger name, usually ``__name__``
        **initial_values: Key/value pairs bound into every record

    Returns:
        Bound logger

    Usage::

        log = get_logger(__name__)
        log.info("module_loaded", module="monitoring")
    """
    return structlog.get_logger(name, **initial_values)
