"""Logging utility."""

import logging
import os
from typing import Optional

from ..config import settings as default_settings

# Parent of every module logger in the package (revlines.reader, revlines.aio, ...)
APP_LOGGER_NAME = "revlines"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True
) -> logging.Logger:
    """
    Set up a logger with optional console and file output.

    A logger left without any output gets a NullHandler, so records only
    reach whatever the host application configured on the root logger.

    Args:
        name: Logger name
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        console: Whether to attach a stderr handler

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get an existing logger by name."""
    return logging.getLogger(name)


# Library logger instance
app_logger: Optional[logging.Logger] = None


def init_app_logger(settings=None, console: bool = False) -> logging.Logger:
    """
    (Re)configure the library logger from settings.

    Handlers from a previous call are closed and replaced. The library
    writes to the console only when asked to; log_file adds a file handler.

    Args:
        settings: Settings instance providing log_level and log_file,
            defaults to the global settings
        console: Whether to also log to stderr

    Returns:
        Configured library logger
    """
    global app_logger

    settings = settings or default_settings

    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    app_logger = setup_logger(
        name=APP_LOGGER_NAME,
        log_level=settings.log_level,
        log_file=settings.log_file,
        console=console
    )

    return app_logger


def get_app_logger() -> logging.Logger:
    """Get the library logger, configuring it from the global settings on first use."""
    if app_logger is None:
        return init_app_logger()

    return app_logger
