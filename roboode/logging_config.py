"""
Logging configuration for scripts using roboode.

The library only creates module loggers under the 'roboode' namespace;
applications call setup_logging() to attach handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: int = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the 'roboode' logger.

    Args:
        level: logging level (e.g. logging.DEBUG, logging.INFO).
        log_file: optional path to also write logs to a file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("roboode")
    logger.setLevel(level)

    # avoid duplicate handlers when called more than once
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
