"""Core of anchor-http-client: config, request model, transport and engine."""

from .exceptions import (
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
from .config import HTTPClientConfig, TimeoutConfig, SecurityConfig
from .request import (
    RequestMethod,
    Header,
    GetRequest,
    PostRequest,
    PutRequest,
    DeleteRequest,
    Request,
)
from .response import Response, Result
from .transport import Connection, Transport, RequestsTransport
from .http_client import HTTPClient

__all__ = [
    "HTTPClient",
    "HTTPClientConfig",
    "TimeoutConfig",
    "SecurityConfig",
    "RequestMethod",
    "Header",
    "GetRequest",
    "PostRequest",
    "PutRequest",
    "DeleteRequest",
    "Request",
    "Response",
    "Result",
    "Connection",
    "Transport",
    "RequestsTransport",
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
]
