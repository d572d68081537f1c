#!/usr/bin/env python3
"""Logging for ignorekit.

Messages carry keyword context that is appended as ``key=value`` pairs and
attached to the record as ``record.context``. The package logger takes its
level and optional rotating log file from the ``ignorekit.logging`` config
section.

Example:
    >>> logger = get_logger()
    >>> logger.debug("Compiled ignore pattern", pattern="*.log", negated=False)
"""

import logging
import logging.handlers
from enum import IntEnum
from typing import Any, List, Optional, Union

from ignorekit.core.constants import ConfigKey
from ignorekit.infrastructure.config_manager import ConfigManager, get_config_manager

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_FILE_BACKUPS = 5


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


def _as_level(level: Union[LogLevel, str, int]) -> LogLevel:
    if isinstance(level, str):
        return LogLevel[level.upper()]
    return LogLevel(level)


def _with_format(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler


class Logger:
    """A stdlib logger that renders keyword context into each message."""

    def __init__(
        self,
        name: str = "ignorekit",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name
            level: Minimum level, as a LogLevel or a name such as "debug"
            handlers: Output handlers, a stderr console handler if omitted
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(_as_level(level))

        if handlers is None:
            handlers = [_with_format(logging.StreamHandler())]
        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    @classmethod
    def from_config(cls, config: ConfigManager, name: str = "ignorekit") -> "Logger":
        """Build a logger from the ``ignorekit.logging`` config section.

        Args:
            config: Configuration to read
            name: Logger name

        Returns:
            Logger writing to stderr, and to ``logging.file`` when set
        """
        section = f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}"
        level = config.get(f"{section}.{ConfigKey.LOG_LEVEL}", LogLevel.WARNING)
        log_file = config.get(f"{section}.{ConfigKey.LOG_FILE}")

        handlers: List[logging.Handler] = [_with_format(logging.StreamHandler())]
        if log_file:
            handlers.append(
                _with_format(
                    logging.handlers.RotatingFileHandler(
                        log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
                    )
                )
            )
        return cls(name=name, level=level, handlers=handlers)

    def _log(self, level: LogLevel, msg: str, context: dict) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if context:
            msg = f"{msg} | " + " ".join(f"{k}={v}" for k, v in context.items())
        self.logger.log(level, msg, extra={"context": context})

    def debug(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.ERROR, msg, context)


# Global logger instance
_global_logger: Optional[Logger] = None


def get_logger(name: str = "ignorekit") -> Logger:
    """Get the package logger, configuring it on first use.

    Args:
        name: Logger name

    Returns:
        Logger built from the global configuration
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger.from_config(get_config_manager(), name=name)
    return _global_logger


def set_global_logger(logger: Optional[Logger]) -> None:
    """Set the global logger instance, or None to rebuild it from config."""
    global _global_logger
    _global_logger = logger
