"""
Logging Utility
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "protrusion_analysis"


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    log_file: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configures and returns a logger.

    Args:
        name: Name of the logger.
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        log_file: Optional path to a log file. If provided, logs will be written here.
        console: Whether to output logs to the console.

    Returns:
        logging.Logger: A configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicate logs
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler (stderr, so stdout stays free for the summary)
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Retrieves a logger. The package logger is set up with defaults on first
    use; child loggers propagate to it and get no handlers of their own.

    Args:
        name: Name of the logger.

    Returns:
        logging.Logger: The requested logger instance.
    """
    logger = logging.getLogger(name)
    if name == LOGGER_NAME and not logger.handlers:
        setup_logger(name)
    return logger


class LogMixin:
    """A mixin class that provides a convenient logger property to its subclasses."""

    @property
    def logger(self) -> logging.Logger:
        """Returns a logger instance specific to the class using this mixin."""
        if not hasattr(self, "_logger"):
            class_name = self.__class__.__name__
            self._logger = get_logger(f"{LOGGER_NAME}.{class_name}")
        return self._logger
