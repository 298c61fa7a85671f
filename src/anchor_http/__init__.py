"""anchor-http-client - synchronous HTTP client with composite TLS trust and interceptors."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.http_client import HTTPClient
from .core.config import HTTPClientConfig, TimeoutConfig, SecurityConfig
from .core.request import (
    RequestMethod,
    Header,
    GetRequest,
    PostRequest,
    PutRequest,
    DeleteRequest,
    Request,
)
from .core.response import Response, Result
from .core.transport import Connection, Transport, RequestsTransport
from .core.exceptions import (
    HTTPClientException,
    TrustValidationFailed,
    RedirectDetected,
    UnsuccessfulStatus,
    TransportFault,
    TimeoutError,
    ConnectionError,
    SSLError,
    InvalidURLError,
    InterceptorError,
    ConfigurationError,
)
from .core.env_config import load_from_env
from .core.logging import LoggingConfig
from .security import CompositeTrustManager, TrustEvaluator, StoreTrustEvaluator
from .interceptors import (
    RequestInterceptor,
    FunctionInterceptor,
    AuthInterceptor,
    HeadersInterceptor,
    QueryParamsInterceptor,
    LoggingInterceptor,
)

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('anchor_http')
logging.getLogger('anchor_http').addHandler(logging.NullHandler())

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("anchor-http-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "HTTPClient",

    # Config
    "HTTPClientConfig",
    "TimeoutConfig",
    "SecurityConfig",
    "LoggingConfig",
    "load_from_env",

    # Requests / responses
    "RequestMethod",
    "Header",
    "GetRequest",
    "PostRequest",
    "PutRequest",
    "DeleteRequest",
    "Request",
    "Response",
    "Result",

    # Transport
    "Connection",
    "Transport",
    "RequestsTransport",

    # Trust
    "CompositeTrustManager",
    "TrustEvaluator",
    "StoreTrustEvaluator",

    # Interceptors
    "RequestInterceptor",
    "FunctionInterceptor",
    "AuthInterceptor",
    "HeadersInterceptor",
    "QueryParamsInterceptor",
    "LoggingInterceptor",

    # Exceptions
    "HTTPClientException",
    "TrustValidationFailed",
    "RedirectDetected",
    "UnsuccessfulStatus",
    "TransportFault",
    "TimeoutError",
    "ConnectionError",
    "SSLError",
    "InvalidURLError",
    "InterceptorError",
    "ConfigurationError",

    # Version
    "__version__",
]
