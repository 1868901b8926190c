"""Logging setup for processes that report notices.

The notifier itself only emits events through ``get_logger``; applications
and the CLI call ``configure_logging`` once to decide where they go.
"""

import logging
import sys
from typing import cast

import structlog


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """Route notifier and httpx logs through structlog.

    Output is JSON when stderr is not a terminal and human readable when it is.

    Args:
        service_name: Bound as ``service`` on every event
        level: Minimum level name, e.g. 'DEBUG' or 'WARNING'
    """
    log_level = getattr(logging, level.upper())

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if sys.stderr.isatty():
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    # stdout is reserved for command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processor=renderer)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # httpx logs one INFO line per request
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return cast(structlog.BoundLogger, structlog.get_logger(name))
