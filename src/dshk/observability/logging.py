"""Structured logging configuration using structlog.

``configure_logging()`` selects either coloured console output for
interactive use or newline-delimited JSON for log collectors. Both write
to stderr so decoded output on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

import structlog


def configure_logging(
    level: str = "INFO",
    fmt: Literal["console", "json"] = "console",
    include_caller: bool = False,
) -> None:
    """Configure structlog and the stdlib root logger.

    Parameters
    ----------
    level:
        Standard log level name, e.g. ``"DEBUG"``, ``"INFO"``, ``"WARNING"``.
    fmt:
        ``"console"`` for human-readable output,
        ``"json"`` for machine-readable newline-delimited JSON.
    include_caller:
        If True, attach ``module`` and ``lineno`` to every event.
    """
    numeric_level = logging.getLevelName(level.upper())

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if include_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )


def get_logger(name: str | None = None) -> structlog.types.FilteringBoundLogger:
    """Return a bound structlog logger for the given module name."""
    return structlog.get_logger(name)
