"""Logging entry point for applications embedding the engine.

The package disables its own loguru records on import; a host application
calls ``setup_logger`` once to install sinks and turn them back on.
"""

import sys
from pathlib import Path

from loguru import logger

from lunch.config.settings import settings

PACKAGE = "lunch"

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    rotation: str | None = None,
    retention: str | None = None,
) -> None:
    """Install console and optional file sinks and enable ``lunch`` records.

    Every argument left as None is taken from settings (LUNCH_LOG_LEVEL,
    LUNCH_LOG_FILE, LUNCH_LOG_ROTATION, LUNCH_LOG_RETENTION).
    """
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation or settings.log_rotation,
            retention=retention or settings.log_retention,
            compression="zip",
            backtrace=True,
            diagnose=True,
        )

    logger.enable(PACKAGE)
    logger.info(f"[LOGGING] {PACKAGE} logging enabled with level={level} file={log_file or '-'}")
