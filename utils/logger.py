"""
Logging setup for Forum Ranking.

Usage:
    from utils import logger, init_logging

    init_logging(app_name="api")
    logger.info("Thread built")
"""
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"

# Sinks added by the last init_logging call
_handler_ids: List[int] = []
_default_removed = False


def init_logging(
    app_name: str = "forum",
    log_level: Optional[str] = None,
    log_dir: Optional[Path] = None
) -> None:
    """
    Log to stderr, and to a daily rotated file when a log directory is set.

    Calling again replaces the sinks of the previous call, so the API and
    tests can each configure their own.

    Args:
        app_name: Name prefix for log files (e.g., "api", "migrations")
        log_level: Minimum level (defaults to settings.LOG_LEVEL)
        log_dir: Directory for log files (defaults to settings.LOG_DIR,
                 file logging is off when neither is set)
    """
    global _default_removed
    from config import settings

    log_level = log_level or settings.LOG_LEVEL
    log_dir = log_dir or settings.LOG_DIR

    if not _default_removed:
        # loguru ships with its own stderr sink
        logger.remove()
        _default_removed = True
    while _handler_ids:
        logger.remove(_handler_ids.pop())

    _handler_ids.append(logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT))

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        _handler_ids.append(logger.add(
            log_dir / f"{app_name}_{{time:YYYY-MM-DD}}.log",
            level=log_level,
            format=FILE_FORMAT,
            rotation="00:00",
            retention="30 days",
            compression="gz",
            encoding="utf-8"
        ))
        logger.info(f"Logging to {log_dir}")


__all__ = ["logger", "init_logging"]
