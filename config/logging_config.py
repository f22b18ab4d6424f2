"""
Centralized logging configuration.

Library modules only call logging.getLogger(__name__); handlers are
attached once, by the entry point (docstyle.cli), under the 'docstyle'
logger. Nothing is written to disk unless a log file is requested.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .constants import (
    LOG_LEVEL, LOG_FORMAT,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)


def setup_logger(name: str = None, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Get or create a configured logger.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger("docstyle", log_file="logs/docstyle.log")
        logger.info("Message here")

    Args:
        name: Logger name. If None, uses 'docstyle'.
        log_file: Rotating DEBUG log file; console only when None.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name or 'docstyle')

    # Avoid adding handlers multiple times
    if not logger.handlers:
        logger.setLevel(getattr(logging, LOG_LEVEL))

        # Console handler - WARNING level, the engine is used as a library
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console)

    has_file = any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
    if log_file and not has_file:
        # File handler with rotation - DEBUG level
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger

