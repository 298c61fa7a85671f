"""Request interceptors for anchor-http-client."""

from .interceptor import RequestInterceptor, FunctionInterceptor
from .auth_interceptor import AuthInterceptor
from .headers_interceptor import HeadersInterceptor
from .query_interceptor import QueryParamsInterceptor
from .logging_interceptor import LoggingInterceptor

__all__ = [
    "RequestInterceptor",
    "FunctionInterceptor",
    "AuthInterceptor",
    "HeadersInterceptor",
    "QueryParamsInterceptor",
    "LoggingInterceptor",
]
