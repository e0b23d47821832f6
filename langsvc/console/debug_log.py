"""Scoped debug logging with level-colored console output."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

_LEVEL_COLORS = {
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
    logging.WARNING: "\x1b[33m",
}
_DIM = "\x1b[90m"
_RESET = "\x1b[m"


class LevelColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        level_color = _LEVEL_COLORS.get(record.levelno, _DIM)
        return f"{level_color}[{record.levelname}]{_RESET} {_DIM}{message}{_RESET}"


@contextmanager
def debug_logging(
    enabled: bool,
    logger_name: str = "langsvc",
    stream: Optional[TextIO] = None,
) -> Iterator[Optional[logging.Handler]]:
    """Attach a DEBUG handler to the package logger for the duration of the block."""
    if not enabled:
        yield None
        return

    logger = logging.getLogger(logger_name)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LevelColorFormatter("%(name)s: %(message)s"))
    previous_level = logger.level
    previous_propagate = logger.propagate
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
        logger.propagate = previous_propagate
        handler.close()
