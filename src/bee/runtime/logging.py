"""Structured JSON logging for services, built on structlog.

Each :class:`~bee.runtime.service.Service` owns its own logger instance
instead of reconfiguring structlog globally, so libraries importing
``bee`` keep whatever logging setup the application chose.
"""

from __future__ import annotations

import sys
from typing import TextIO

import structlog
from structlog.typing import FilteringBoundLogger

_LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "WARNING": 30,
    "ERROR": 40,
}


def level_number(level: str) -> int:
    """Map a level name to its numeric value; unknown names mean DEBUG."""
    return _LEVELS.get(level.upper(), _LEVELS["DEBUG"])


def new_logger(level: str = "DEBUG", stream: TextIO | None = None) -> FilteringBoundLogger:
    """Create a JSON logger writing one object per line to *stream*.

    Args:
        level: Minimum level (DEBUG, INFO, WARN, ERROR).
        stream: Destination; stdout when omitted.
    """
    processors: list[structlog.typing.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.JSONRenderer(),
    ]
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        structlog.PrintLogger(stream if stream is not None else sys.stdout),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_number(level)),
    )
