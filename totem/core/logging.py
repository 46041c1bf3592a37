"""Logging setup shared by the API and the maintenance scripts."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5

_HANDLER_MARK = "_totem_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console and rotating file handlers to the ``totem`` logger.

    Development gets a console handler. When file logging is enabled, all
    records go to ``combined.log`` and ERROR records also go to ``error.log``.
    Calling this again replaces the handlers it installed earlier.

    Args:
        settings: Application settings

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("totem")
    logger.setLevel(settings.effective_log_level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if settings.environment == "development":
        console = _mark(logging.StreamHandler(sys.stdout))
        console.setFormatter(formatter)
        logger.addHandler(console)

    if settings.file_logging_enabled:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        error_file = _mark(
            RotatingFileHandler(log_dir / "error.log", maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT)
        )
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(formatter)
        logger.addHandler(error_file)

        combined_file = _mark(
            RotatingFileHandler(log_dir / "combined.log", maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT)
        )
        combined_file.setFormatter(formatter)
        logger.addHandler(combined_file)

    return logger
