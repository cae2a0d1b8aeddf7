"""loguru configuration for the storefront service."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(log_level: str = "INFO", log_file: Path | None = None):
    """Replace loguru's default sink with the service's stderr (and file) sinks.

    Returns the logger bound to ``service="storefront"``.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=_CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=_FILE_FORMAT,
            rotation="10 MB",
            retention="1 week",
            compression="gz",
        )
    return logger.bind(service="storefront")
