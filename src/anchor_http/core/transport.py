# src/anchor_http/core/transport.py
"""
Transport abstraction for HTTPClient.

A Transport opens one Connection per request. A Connection mirrors a
single request/response exchange: headers are added, the body is written,
the status code is read (which performs the exchange), then the body is
read and the connection is closed. Nothing is pooled or reused.

RequestsTransport implements this on top of requests, with a fresh Session
and a single-connection HTTPAdapter per exchange.
"""
import ssl
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

from .config import TimeoutConfig
from .exceptions import InvalidURLError, TransportFault, classify_requests_exception
from .utils import decode_body, fold_headers


class Connection(ABC):
    """One request/response exchange. Methods raise TransportFault on I/O failure."""

    @abstractmethod
    def add_header(self, name: str, value: str) -> None:
        """Add a request header; existing headers with the same name are kept."""

    @abstractmethod
    def write_body(self, data: bytes) -> None:
        """Write the request body."""

    @abstractmethod
    def get_status_code(self) -> int:
        """Send the request (if not sent yet) and return the response status."""

    @abstractmethod
    def read_body(self) -> str:
        """Response body decoded as UTF-8."""

    @abstractmethod
    def read_error_body(self) -> Optional[str]:
        """Error body decoded as UTF-8, or None if the transport has none."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection."""


class Transport(ABC):
    """Factory of connections."""

    @abstractmethod
    def open_connection(
        self,
        url: str,
        method: str,
        timeout: TimeoutConfig,
        ssl_context: Optional[ssl.SSLContext] = None
    ) -> Connection:
        """
        Open a connection for one request.

        Args:
            url: Absolute request URL
            method: HTTP method
            timeout: Connect/read timeouts
            ssl_context: TLS trust to use for https URLs (None for plain http)
        """


class TrustStoreAdapter(HTTPAdapter):
    """
    HTTPAdapter that verifies TLS with a caller-supplied SSLContext.

    Holds a single connection; no retries.
    """

    def __init__(self, ssl_context: Optional[ssl.SSLContext] = None):
        self._ssl_context = ssl_context
        super().__init__(pool_connections=1, pool_maxsize=1, max_retries=0)

    def init_poolmanager(self, *args, **kwargs):
        if self._ssl_context is not None:
            kwargs['ssl_context'] = self._ssl_context
        return super().init_poolmanager(*args, **kwargs)


class RequestsConnection(Connection):
    """Connection backed by a dedicated requests.Session."""

    def __init__(
        self,
        url: str,
        method: str,
        timeout: TimeoutConfig,
        ssl_context: Optional[ssl.SSLContext] = None
    ):
        self.url = url
        self.method = method
        self._timeout = timeout
        self._headers: List[Tuple[str, str]] = []
        self._body: Optional[bytes] = None
        self._response: Optional[requests.Response] = None
        self._closed = False

        self._session = requests.Session()
        # Default session headers (User-Agent etc.) stay; Accept is set by the client
        self._session.headers.pop('Accept', None)
        adapter = TrustStoreAdapter(ssl_context)
        self._session.mount('http://', adapter)
        self._session.mount('https://', adapter)

    def add_header(self, name: str, value: str) -> None:
        self._headers.append((name, value))

    def write_body(self, data: bytes) -> None:
        if self._response is not None:
            raise TransportFault("Cannot write body after the request was sent", self.url)
        self._body = (self._body or b"") + data

    def _execute(self) -> requests.Response:
        if self._response is None:
            try:
                self._response = self._session.request(
                    method=self.method,
                    url=self.url,
                    headers=fold_headers(self._headers),
                    data=self._body,
                    timeout=self._timeout.as_tuple(),
                    allow_redirects=False,
                )
            except requests.exceptions.RequestException as e:
                raise classify_requests_exception(e, self.url) from e
            except UnicodeError as e:
                # http.client encodes header values as Latin-1
                raise TransportFault(f"Request cannot be encoded: {e}", self.url, e) from e
            except ValueError as e:
                raise InvalidURLError(f"Invalid URL: {e}", self.url, e) from e
        return self._response

    def get_status_code(self) -> int:
        return self._execute().status_code

    def read_body(self) -> str:
        response = self._execute()
        try:
            return decode_body(response.content)
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, self.url) from e

    def read_error_body(self) -> Optional[str]:
        response = self._execute()
        try:
            content = response.content
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, self.url) from e
        return decode_body(content) if content else None

    @property
    def sent_headers(self) -> List[Tuple[str, str]]:
        """Headers as added, before folding."""
        return list(self._headers)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._response is not None:
            self._response.close()
        self._session.close()


class RequestsTransport(Transport):
    """Default transport: one RequestsConnection per request."""

    def open_connection(
        self,
        url: str,
        method: str,
        timeout: TimeoutConfig,
        ssl_context: Optional[ssl.SSLContext] = None
    ) -> RequestsConnection:
        return RequestsConnection(url, method, timeout, ssl_context)
