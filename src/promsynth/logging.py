"""
Logging setup for build scripts that use promsynth.

The library only emits structlog events (``serialized``, ``wrote_file``,
``write_failed`` and so on); it never configures logging on import. Call
:func:`configure_logging` once from the program that generates configs.
"""

import logging
from typing import Any

import structlog


def configure_logging(level: int | str = logging.INFO, json_output: bool = True) -> None:
    """Route structlog through the standard logging module.

    Args:
        level: threshold for both structlog and the root logger
        json_output: one JSON object per line when True, coloured console
            output otherwise
    """
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s", force=True)


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Return a logger carrying ``kwargs``, e.g. the output directory of a build run."""
    return structlog.get_logger().bind(**kwargs)
