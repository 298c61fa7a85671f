"""
Correlation ID одного выполнения запроса.

HTTPClient выставляет ID перед interceptors и снимает после доставки
результата. ID хранится в thread-local, поэтому параллельные запросы из
разных потоков не видят чужие ID. В заголовки запроса он не попадает.
"""

import logging
import threading
from typing import Optional

_state = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    _state.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_state, 'correlation_id', None)


def clear_correlation_id() -> None:
    _state.__dict__.pop('correlation_id', None)


class CorrelationIdFilter(logging.Filter):
    """
    Проставляет record.correlation_id из текущего потока.

    ID, переданный явно в вызове логгера, не перезаписывается.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id is not None and not hasattr(record, 'correlation_id'):
            record.correlation_id = correlation_id
        return True
