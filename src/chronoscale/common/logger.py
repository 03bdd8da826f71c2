"""Defines the :class:`.Logger` class and one-line logging helpers."""

from __future__ import annotations

# Standard Library Imports
import logging
import sys
from logging.handlers import RotatingFileHandler
from os import makedirs
from os.path import exists, join

# Local Imports
from . import pathSafeTime
from .behavioral_config import BehavioralConfig

LOGGER_NAME: str = "chronoscale"
"""``str``: name of the top-level library logger."""

LOG_FORMAT: str = "%(asctime)s - %(module)s - %(levelname)s - %(message)s"
"""``str``: format applied to every handler created by :class:`.Logger`."""

_ONCE_KEYS: set[str] = set()
"""set[str]: keys of messages already emitted through :func:`.chronoscaleLogWarningOnce`."""


class Logger:
    """Extended logger wraps the standard Python logging package.

    It also creates a standard file name and log format for any log files that are saved.
    """

    def __init__(self, name, level=None, path=None, allow_multiple_handlers=None):
        """Configure the logging information for this Logger instance.

        Args:
            name (``string``): Name of the the logger instance
            level (``logging.LOG_LEVEL``): Determines what level of log messages are published
            path (``string``): Path to where the log file will be stored, or ``"stdout"``
            allow_multiple_handlers (``bool``, optional): whether multiple log handlers are permitted
        """
        config = BehavioralConfig.getConfig().logging
        if not level:
            level = config.Level
        if not path:
            path = config.OutputLocation
        if not allow_multiple_handlers:
            allow_multiple_handlers = config.AllowMultipleHandlers

        self.filename = None
        self.logger = logging.getLogger(name)
        if not self.logger.handlers or allow_multiple_handlers is True:
            handler = self._buildHandler(name, path)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))

            self.logger.setLevel(level)
            self.logger.addHandler(handler)

    def _buildHandler(self, name: str, path: str) -> logging.Handler:
        """Create a stdout handler, or a rotating file handler inside `path`.

        Args:
            name (``str``): logger name, used as the log file prefix
            path (``str``): ``"stdout"`` or a directory to write log files into

        Returns:
            ``logging.Handler``: handler that has not been attached yet
        """
        if path == "stdout":
            self.filename = "stdout"
            return logging.StreamHandler(sys.stdout)

        if not exists(path):
            self.logger.info(f"Path did not exist: {path!r}. Creating path...")
            makedirs(path)

        self.filename = join(path, f"{name}_{pathSafeTime()}.log")
        config = BehavioralConfig.getConfig().logging
        return RotatingFileHandler(
            self.filename,
            maxBytes=config.MaxFileSize,
            backupCount=config.MaxFileCount,
        )

    def __getattr__(self, name):
        """Defer to the wrapped ``logging.Logger``."""
        return getattr(self.logger, name)


def _chronoscaleLog(message: str, level: int):
    """Log a message to the top-level library log record.

    This provides a simple one-liner that doesn't require pre-initializing a logger object, which
    suits the pure conversion functions that make up most of this library.

    Args:
        message (``str``): message to record with in the log.
        level (``int``): level at which to log this message, corresponding to `logging.LOG_LEVEL`.
    """
    logging.getLogger(LOGGER_NAME).log(msg=message, level=level)


def chronoscaleLogCritical(message: str):
    """Log a CRITICAL message to the top-level log record."""
    _chronoscaleLog(message, level=logging.CRITICAL)


def chronoscaleLogError(message: str):
    """Log an ERROR message to the top-level log record.

    See Also:
        :func:`._chronoscaleLog`

    Args:
        message (``str``): message to record with in the log.
    """
    _chronoscaleLog(message, level=logging.ERROR)


def chronoscaleLogWarning(message: str):
    """Log a WARNING message to the top-level log record."""
    _chronoscaleLog(message, level=logging.WARNING)


def chronoscaleLogWarningOnce(key: str, message: str) -> bool:
    """Log a WARNING message the first time `key` is seen in this process.

    Args:
        key (``str``): identifies the condition being warned about.
        message (``str``): message to record with in the log.

    Returns:
        ``bool``: whether the message was emitted by this call.
    """
    if key in _ONCE_KEYS:
        return False
    _ONCE_KEYS.add(key)
    chronoscaleLogWarning(message)
    return True


def chronoscaleLogInfo(message: str):
    """Log an INFO message to the top-level log record."""
    _chronoscaleLog(message, level=logging.INFO)


def chronoscaleLogDebug(message: str):
    """Log a DEBUG message to the top-level log record.

    See Also:
        :func:`._chronoscaleLog`

    Args:
        message (``str``): message to record with in the log.
    """
    _chronoscaleLog(message, level=logging.DEBUG)
