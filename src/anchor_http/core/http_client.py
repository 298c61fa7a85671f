# src/anchor_http/core/http_client.py
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING
import logging
import time
import uuid

from .config import HTTPClientConfig
from .exceptions import (
    InterceptorError,
    InvalidURLError,
    RedirectDetected,
    TransportFault,
    UnsuccessfulStatus,
)
from .interceptor_chain import InterceptorChain
from .logging.logger import HTTPClientLogger
from .request import (
    BODY_REQUEST_TYPES,
    DeleteRequest,
    GetRequest,
    PostRequest,
    PutRequest,
    Request,
)
from .response import Response, Result
from .transport import Connection, RequestsTransport, Transport
from .utils import is_redirect, is_secure_url, is_successful, sanitize_url
from ..security.certificates import load_certificates
from ..security.trust import CompositeTrustManager

# Delayed import to avoid circular dependency
if TYPE_CHECKING:
    from ..interceptors.interceptor import RequestInterceptor

Callback = Callable[[Result], None]

ACCEPT_HEADER = ("Accept", "application/json")
CONTENT_TYPE_HEADER = ("Content-Type", "application/json; utf-8")

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    HTTP клиент с составным доверием TLS и цепочкой interceptors.

    Features:
        - Системные CA + дополнительные CA из конфига (доверие по OR)
        - Interceptors, применяемые к каждому запросу перед отправкой
        - Редиректы не выполняются, а возвращаются как RedirectDetected
        - Каждый запрос получает собственное соединение, которое всегда закрывается
        - Результат возвращается и, если передан callback, доставляется ровно один раз
        - Immutable конфигурация для потокобезопасности

    Example:
        >>> with HTTPClient(HTTPClientConfig.create(certificate="corp-ca.pem")) as client:
        ...     result = client.execute_get(GetRequest("https://api.example.com/users"))
        ...     if result.is_success:
        ...         print(result.value.body)
    """

    def __init__(
        self,
        config: Optional[HTTPClientConfig] = None,
        transport: Optional[Transport] = None,
        interceptors: Optional[Sequence['RequestInterceptor']] = None,
        trust_manager: Optional[CompositeTrustManager] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            config: HTTPClientConfig instance (defaults: 3s/3s, system CAs only)
            transport: Connection factory (default: RequestsTransport)
            interceptors: Initial interceptors, in order
            trust_manager: Ready-made trust manager; built from
                config.security when omitted

        Raises:
            ConfigurationError: An extra CA certificate cannot be parsed
        """
        config = config or HTTPClientConfig()

        if trust_manager is None:
            trust_manager = CompositeTrustManager(
                load_certificates(data) for data in config.security.extra_ca_certificates
            )

        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_transport', transport or RequestsTransport())
        object.__setattr__(self, '_trust_manager', trust_manager)
        object.__setattr__(self, '_ssl_context', trust_manager.create_ssl_context())

        chain = InterceptorChain()
        for interceptor in interceptors or ():
            chain.add(interceptor)
        object.__setattr__(self, '_interceptors', chain)

        logger_instance = None
        if config.logging is not None:
            logger_instance = HTTPClientLogger(config=config.logging, name="anchor_http")
        object.__setattr__(self, '_logger', logger_instance)

        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - HTTPClient is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    def __enter__(self):
        """Поддержка контекстного менеджера"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """
        Освобождает ресурсы клиента (сейчас это только handlers логгера).

        Соединения закрываются после каждого запроса, поэтому клиентом
        можно продолжать пользоваться и после close().
        """
        if self._logger is not None:
            self._logger.close()

    # ==================== Управление interceptors ====================

    def add_interceptor(self, interceptor: 'RequestInterceptor') -> None:
        """
        Добавляет interceptor в конец цепочки.

        Один и тот же interceptor можно добавить несколько раз.
        """
        self._interceptors.add(interceptor)

    def remove_interceptor(self, interceptor: 'RequestInterceptor') -> bool:
        """
        Удаляет первое вхождение interceptor.

        Returns:
            True если interceptor был зарегистрирован
        """
        return self._interceptors.remove(interceptor)

    def remove_all_interceptors(self) -> None:
        """Удаляет все interceptors"""
        self._interceptors.clear()

    @property
    def interceptors(self) -> List['RequestInterceptor']:
        """Копия текущей цепочки interceptors."""
        return self._interceptors.snapshot()

    # ==================== Выполнение запросов ====================

    def execute_get(self, request: GetRequest, callback: Optional[Callback] = None) -> Result:
        """
        Выполняет GET запрос.

        Args:
            request: GetRequest
            callback: Вызывается ровно один раз с тем же Result, что и возвращается

        Raises:
            TypeError: Передан запрос другого типа
        """
        _require(request, GetRequest)
        return self._execute(request, callback)

    def execute_post(self, request: PostRequest, callback: Optional[Callback] = None) -> Result:
        """Выполняет POST запрос. Тело отправляется как UTF-8."""
        _require(request, PostRequest)
        return self._execute(request, callback)

    def execute_put(self, request: PutRequest, callback: Optional[Callback] = None) -> Result:
        """Выполняет PUT запрос. Тело отправляется как UTF-8."""
        _require(request, PutRequest)
        return self._execute(request, callback)

    def execute_delete(self, request: DeleteRequest, callback: Optional[Callback] = None) -> Result:
        """Выполняет DELETE запрос."""
        _require(request, DeleteRequest)
        return self._execute(request, callback)

    def execute(self, request: Request, callback: Optional[Callback] = None) -> Result:
        """
        Выполняет запрос любого поддерживаемого типа.

        Raises:
            TypeError: Неизвестный тип запроса
        """
        if isinstance(request, GetRequest):
            return self.execute_get(request, callback)
        if isinstance(request, PostRequest):
            return self.execute_post(request, callback)
        if isinstance(request, PutRequest):
            return self.execute_put(request, callback)
        if isinstance(request, DeleteRequest):
            return self.execute_delete(request, callback)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    def _execute(self, request: Request, callback: Optional[Callback]) -> Result:
        correlation_id = str(uuid.uuid4())

        if self._logger:
            from .logging.filters import set_correlation_id
            set_correlation_id(correlation_id)

        try:
            result = self._run(request, correlation_id)
        finally:
            if self._logger:
                from .logging.filters import clear_correlation_id
                clear_correlation_id()

        if callback is not None:
            callback(result)
        return result

    def _run(self, request: Request, correlation_id: str) -> Result:
        method = request.method.value

        # 1. Interceptors (snapshot, request mutated in place)
        for interceptor in self._interceptors.snapshot():
            try:
                interceptor.intercept(request)
            except Exception as e:
                error = InterceptorError(interceptor, e)
                if self._logger:
                    self._logger.error(
                        "Interceptor failed",
                        method=method,
                        url=sanitize_url(request.url),
                        interceptor=repr(interceptor),
                        error=str(e),
                        error_type=type(e).__name__,
                        correlation_id=correlation_id,
                    )
                return Result.failure(error)

        url = request.url
        if self._logger:
            self._logger.info(
                "Request started",
                method=method,
                url=sanitize_url(url),
                correlation_id=correlation_id,
            )

        start_time = time.time()
        connection: Optional[Connection] = None

        try:
            # 2. Open
            connection = self._open(url, method)

            # 3. Send
            self._send(connection, request, url)

            # 4. Classify
            result = self._classify(url, connection)

        except TransportFault as e:
            result = Result.failure(e)
        except OSError as e:
            # Custom transports may leak raw socket errors
            fault = TransportFault(f"I/O error: {e}", url=url, cause=e)
            result = Result.failure(fault)
        finally:
            if connection is not None:
                self._close(connection, url)

        duration_ms = round((time.time() - start_time) * 1000, 2)
        self._log_result(method, url, result, duration_ms, correlation_id)
        return result

    def _open(self, url: str, method: str) -> Connection:
        try:
            ssl_context = self._ssl_context if is_secure_url(url) else None
        except ValueError as e:
            raise InvalidURLError(f"Invalid URL: {e}", url=url, cause=e) from e

        try:
            return self._transport.open_connection(
                url, method, self._config.timeout, ssl_context
            )
        except ValueError as e:
            raise InvalidURLError(f"Invalid URL: {e}", url=url, cause=e) from e

    def _send(self, connection: Connection, request: Request, url: str) -> None:
        # UnicodeEncodeError is a ValueError: lone surrogates in the body,
        # header values the transport cannot encode
        try:
            connection.add_header(*ACCEPT_HEADER)
            if isinstance(request, BODY_REQUEST_TYPES):
                connection.add_header(*CONTENT_TYPE_HEADER)
            for header in request.headers:
                connection.add_header(header.name, header.value)
            if isinstance(request, BODY_REQUEST_TYPES):
                connection.write_body(request.body.encode('utf-8'))
        except ValueError as e:
            raise TransportFault(f"Request cannot be encoded: {e}", url=url, cause=e) from e

    def _classify(self, url: str, connection: Connection) -> Result:
        status_code = connection.get_status_code()

        if is_successful(status_code):
            return Result.success(Response(status_code, connection.read_body()))

        if is_redirect(status_code):
            return Result.failure(RedirectDetected(url, status_code, connection.read_body()))

        return Result.failure(
            UnsuccessfulStatus(url, status_code, connection.read_error_body() or "")
        )

    def _close(self, connection: Connection, url: str) -> None:
        try:
            connection.close()
        except (TransportFault, OSError) as e:
            # Result already decided, a failed close must not replace it
            if self._logger:
                self._logger.warning(
                    "Connection close failed",
                    url=sanitize_url(url),
                    error=str(e),
                    error_type=type(e).__name__,
                )
            else:
                logger.warning("Connection close failed for %s: %s", sanitize_url(url), e)

    def _log_result(
        self,
        method: str,
        url: str,
        result: Result,
        duration_ms: float,
        correlation_id: str
    ) -> None:
        if not self._logger:
            return

        fields = dict(
            method=method,
            url=sanitize_url(url),
            duration_ms=duration_ms,
            correlation_id=correlation_id,
        )
        error = result.error

        if result.is_success:
            self._logger.info("Request completed", status_code=result.value.status_code, **fields)
        elif isinstance(error, RedirectDetected):
            self._logger.warning("Request redirected", status_code=error.status_code, **fields)
        elif isinstance(error, UnsuccessfulStatus):
            self._logger.warning("Request failed with status", status_code=error.status_code, **fields)
        else:
            self._logger.error(
                "Transport fault",
                error=str(error),
                error_type=type(error).__name__,
                **fields
            )

    # ==================== Свойства ====================

    @property
    def config(self) -> HTTPClientConfig:
        """Получить конфигурацию клиента (read-only)."""
        return self._config

    @property
    def trust_manager(self) -> CompositeTrustManager:
        """Составной trust manager, из которого построен TLS контекст."""
        return self._trust_manager

    @property
    def transport(self) -> Transport:
        return self._transport


def _require(request: Request, expected: type) -> None:
    if not isinstance(request, expected):
        raise TypeError(
            f"Expected {expected.__name__}, got {type(request).__name__}"
        )
