"""Structured logging helpers for the attendance gateway."""

from __future__ import annotations

import logging
import sys
from typing import List, Union

import structlog
from structlog.contextvars import bound_contextvars
from structlog.types import Processor

__all__ = ["bound_contextvars", "configure_logging", "get_logger"]


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric


def _processors() -> List[Processor]:
    # Context bound per tool call (tool name) is merged into every event.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Route structlog events through stdlib logging as one JSON object per line.

    The stdio transport owns stdout, so the root handler writes to stderr.
    """
    numeric_level = _coerce_level(level)
    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stderr)
    logging.getLogger("attendance_mcp").setLevel(numeric_level)
    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
