"""
Logging system for anchor-http-client.

Provides structured logging with multiple formats, handlers, and filters.

Example:
    >>> from anchor_http.core.logging import LoggingConfig
    >>> from anchor_http import HTTPClient, HTTPClientConfig
    >>>
    >>> config = HTTPClientConfig.create(
    ...     logging=LoggingConfig.create(level="DEBUG", format="json")
    ... )
    >>> client = HTTPClient(config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import HTTPClientLogger, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "HTTPClientLogger",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
