# src/anchor_http/interceptors/query_interceptor.py

from typing import Mapping
from urllib.parse import urlsplit, urlunsplit, urlencode

from .interceptor import RequestInterceptor
from ..core.request import Request


class QueryParamsInterceptor(RequestInterceptor):
    """
    Добавляет query параметры к URL запроса.

    Существующие параметры сохраняются, новые дописываются в конец
    (URL-encoded). Фрагмент URL не меняется.

    Example:
        >>> interceptor = QueryParamsInterceptor({"api_version": "3"})
        >>> request = GetRequest("https://api.example.com/users?page=2")
        >>> interceptor.intercept(request)
        >>> request.url
        'https://api.example.com/users?page=2&api_version=3'
    """

    def __init__(self, params: Mapping[str, str]):
        self.params = dict(params)

    def intercept(self, request: Request) -> None:
        if not self.params:
            return

        parts = urlsplit(request.url)
        extra = urlencode(self.params)
        query = f"{parts.query}&{extra}" if parts.query else extra
        request.url = urlunsplit(parts._replace(query=query))

    def __repr__(self) -> str:
        return f"QueryParamsInterceptor({sorted(self.params)!r})"
