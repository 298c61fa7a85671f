# src/anchor_http/interceptors/headers_interceptor.py

from typing import Iterable, Mapping, Tuple, Union

from .interceptor import RequestInterceptor
from ..core.request import Request


class HeadersInterceptor(RequestInterceptor):
    """
    Добавляет фиксированный набор заголовков к каждому запросу.

    Заголовки добавляются, а не заменяют существующие: если запрос уже
    содержит такое имя, на проводе будут оба значения.

    Example:
        >>> client.add_interceptor(HeadersInterceptor({"User-Agent": "billing/2.1"}))
    """

    def __init__(self, headers: Union[Mapping[str, str], Iterable[Tuple[str, str]]]):
        items = headers.items() if isinstance(headers, Mapping) else headers
        self.headers = tuple((str(name), str(value)) for name, value in items)

    def intercept(self, request: Request) -> None:
        for name, value in self.headers:
            request.add_header(name, value)

    def __repr__(self) -> str:
        return f"HeadersInterceptor({[name for name, _ in self.headers]!r})"
