"""
Main logger for anchor-http-client.

Wraps a stdlib logger with handlers, formatters and filters built from a
LoggingConfig, and accepts structured fields as keyword arguments.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import CorrelationIdFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class HTTPClientLogger:
    """
    Structured logger.

    Keyword arguments of every log call become structured fields; values
    are masked with `mask_sensitive_data` before they reach a handler.

    Example:
        >>> logger = HTTPClientLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request started", method="GET", url="https://api.com")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "anchor_http"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self._get_level(self.config.level)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Remove existing handlers (if reinitializing)
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    def _log(self, level: int, message: str, fields: dict, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR with the current exception's traceback."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close all handlers. Idempotent.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# Global logger instance (singleton pattern)
_default_logger: Optional[HTTPClientLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> HTTPClientLogger:
    """
    Get global logger instance.

    `config` is only used on the first call.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = HTTPClientLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> HTTPClientLogger:
    """Replace the global logger with one built from `config`."""
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = HTTPClientLogger(config)
    return _default_logger
