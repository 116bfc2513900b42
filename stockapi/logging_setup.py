"""
Logging configuration for Stock API.

All sinks share the level from settings. Text output is colored on the
console; with LOG_JSON set, every sink emits one JSON record per line.
"""

import sys

from loguru import logger

from .config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(settings: Settings) -> None:
    """Replace loguru's sinks with the console and optional file sinks from settings."""
    logger.remove()

    if settings.log_json:
        logger.add(sys.stderr, level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=settings.log_level, format=CONSOLE_FORMAT, colorize=True)

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            serialize=settings.log_json,
            format=FILE_FORMAT,
        )

    logger.debug(f"Logging configured at {settings.log_level}"
                 f"{' (json)' if settings.log_json else ''}")
