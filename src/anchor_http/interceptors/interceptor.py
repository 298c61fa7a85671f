# src/anchor_http/interceptors/interceptor.py

from abc import ABC, abstractmethod
from typing import Callable

from ..core.request import Request


class RequestInterceptor(ABC):
    """
    Базовый класс для всех interceptors.

    Interceptor получает запрос непосредственно перед отправкой и может
    изменить его на месте (добавить заголовок, query параметр) или
    просто залогировать. Заменить или отменить запрос нельзя - метод
    ничего не возвращает.

    Example:
        >>> class TraceInterceptor(RequestInterceptor):
        ...     def intercept(self, request):
        ...         request.add_header("X-Trace", "1")
    """

    @abstractmethod
    def intercept(self, request: Request) -> None:
        """Вызывается перед отправкой запроса"""
        pass


class FunctionInterceptor(RequestInterceptor):
    """Адаптер: обычная функция `fn(request)` как interceptor."""

    def __init__(self, fn: Callable[[Request], None]):
        self.fn = fn

    def intercept(self, request: Request) -> None:
        self.fn(request)

    def __repr__(self) -> str:
        return f"FunctionInterceptor({getattr(self.fn, '__name__', self.fn)!r})"
