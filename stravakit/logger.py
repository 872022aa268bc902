"""Logging configuration for stravakit."""

import logging
import sys
from datetime import datetime

from stravakit.config import Config


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance.

    Library modules log through ``logging.getLogger(__name__)``; this is only
    called by entry points (the CLI) to attach handlers to the package logger.
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers if they already exist
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if not Config.LOG_TO_FILE:
        return logger

    # File handler
    Config.ensure_directories()
    log_file = Config.LOGS_DIR / f"stravakit_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    return logger
