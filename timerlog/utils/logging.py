"""Logging utilities built on top of :mod:`loguru`."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO", fmt: str = DEFAULT_FORMAT) -> None:
    """Configure the global loguru logger.

    Timer diagnostics (unpaired starts/ends, overlapping intervals) are emitted
    at WARNING, so keep ``level`` at or below that to see them.

    Args:
        log_file: Optional file path for log sink.
        level: Minimum log level (string understood by loguru).
        fmt: Format string for the console sink.
    """

    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, rotation="10 MB", retention="7 days")


__all__ = ["setup_logging", "logger"]
