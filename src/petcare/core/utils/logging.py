"""
Logging configuration using loguru.

Library modules log through ``loguru.logger`` and never configure sinks; the
CLI (or any embedding app) calls :func:`setup_logging` once at startup.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from petcare.core.config import Config

CONSOLE_FORMAT = "<level>{level: <7}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{line} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = CONSOLE_FORMAT,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with stderr and an optional rotating file.

    Args:
        level: Minimum level for both sinks.
        log_file: Path of the log file. Parent directories are created.
        fmt: Console format string.
        rotation: Size at which the log file rotates.
        retention: How long rotated files are kept.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        log_file = os.path.expanduser(log_file)
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def setup_from_config(config: Config, verbose: bool = False) -> None:
    """Configure logging from the ``logging`` section; *verbose* lowers the floor to INFO."""
    level = config.get("logging.level", "WARNING")
    if verbose and level.upper() not in ("TRACE", "DEBUG"):
        level = "INFO"
    setup_logging(level=level, log_file=config.get("logging.file"))
