"""Logging utilities tailored for the Sudoku solver."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union


LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(level: Union[int, str]) -> int:
    """Translate ``"debug"``/``"INFO"``/``10`` style values into a logging level."""

    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown logging level: {level!r}")
    return logging.getLevelName(name)


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure root logging with a sensible formatter.

    Log records go to stderr by default so that boards rendered on stdout by
    the terminal presenter are not interleaved with log lines. Per-commit
    search messages are emitted at DEBUG.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(parse_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "sudoku")
