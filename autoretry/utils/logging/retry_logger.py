"""
Logging for the auto-retry middleware.

This module provides console logging setup for the ``autoretry`` logger
hierarchy and a small logger wrapper that only emits retry diagnostics when
they are enabled on the policy.
"""

import logging
from typing import Any, Dict, Optional, Union

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_PREFIX = "[Auto-Retry]"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}


def setup_logging(
    level: Union[str, int] = "INFO",
    logger_name: str = "autoretry"
) -> logging.Logger:
    """
    Set up console logging for the package.

    Args:
        level: Log level name or numeric level
        logger_name: Logger to configure

    Returns:
        logging.Logger: The configured logger

    Raises:
        ValueError: If an invalid log level is provided
    """
    if isinstance(level, str):
        try:
            level = _LEVELS[level.upper()]
        except KeyError:
            valid_levels = ", ".join(_LEVELS)
            raise ValueError(f"Invalid log level: {level}. Valid levels are: {valid_levels}")

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    return logger


class RetryLogger:
    """
    Logger wrapper for retry diagnostics.

    Messages are prefixed with ``[Auto-Retry]`` and dropped entirely when
    ``enabled`` is false. Structured fields are passed through ``extra``.
    """

    def __init__(self, enabled: bool, logger: Optional[logging.Logger] = None):
        self.enabled = enabled
        self._logger = logger or logging.getLogger("autoretry.retry")

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        self._logger.log(level, f"{LOG_PREFIX} {message}", extra=extra or {})

    def debug(self, message: str, **extra: Any) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, **extra: Any) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._log(logging.WARNING, message, extra)
