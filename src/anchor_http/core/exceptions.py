"""
Иерархия исключений anchor-http-client.

Классификация:
- TransportFault - статус код не был получен (сеть, таймаут, TLS)
- RedirectDetected / UnsuccessfulStatus - сервер ответил, но не 2xx
- TrustValidationFailed - ни один источник доверия не принял цепочку
- InterceptorError - interceptor упал до начала сетевого обмена
"""

from typing import Any, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPClientException(Exception):
    """Базовое исключение anchor-http-client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ДОВЕРИЕ (TLS)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TrustValidationFailed(HTTPClientException):
    """
    Composite trust manager отклонил цепочку сертификатов.

    Несёт только человекочитаемое сообщение.
    """

    def __init__(self, message: str = "None of the trust evaluators trust this certificate chain"):
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТВЕТЫ С НЕУСПЕШНЫМ СТАТУСОМ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RedirectDetected(HTTPClientException):
    """
    Ответ со статусом [300, 400).

    Редиректы никогда не выполняются автоматически - вызывающий код
    решает сам, идти ли по Location.

    Args:
        url: URL запроса
        status_code: HTTP статус
        body: Тело ответа
    """

    def __init__(self, url: str, status_code: int, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body

        super().__init__(
            f"Request to {url} was redirected (status code {status_code}). "
            f"See exception body for details."
        )


class UnsuccessfulStatus(HTTPClientException):
    """
    Ответ со статусом вне [200, 400).

    Args:
        url: URL запроса
        status_code: HTTP статус
        error_body: Тело ошибки (пустая строка если сервер ничего не вернул)
    """

    def __init__(self, url: str, status_code: int, error_body: str = ""):
        self.url = url
        self.status_code = status_code
        self.error_body = error_body

        super().__init__(
            f"Request to {url} failed with status code {status_code}. "
            f"See exception error_body for details."
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportFault(HTTPClientException):
    """
    Ошибка транспорта до получения статус кода.

    Исходное исключение доступно как `cause` и `__cause__`.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        cause: Исходное исключение транспорта
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.url = url
        self.cause = cause

        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

        if cause is not None:
            self.__cause__ = cause


class TimeoutError(TransportFault):
    """
    Таймаут подключения или чтения.

    Args:
        timeout_type: 'connect' или 'read' (None если неизвестно)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        timeout_type: Optional[str] = None
    ):
        self.timeout_type = timeout_type

        msg = message
        if timeout_type:
            msg += f" ({timeout_type} timeout)"

        super().__init__(msg, url, cause)


class ConnectionError(TransportFault):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    pass


class SSLError(TransportFault):
    """TLS handshake не прошёл (в том числе цепочка не доверена)."""
    pass


class InvalidURLError(TransportFault):
    """URL не может быть использован для подключения."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# INTERCEPTORS / КОНФИГУРАЦИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InterceptorError(HTTPClientException):
    """
    Interceptor выбросил исключение - запрос прерван до сетевого обмена.

    Args:
        interceptor: Упавший interceptor
        cause: Исходное исключение
    """

    def __init__(self, interceptor: Any, cause: BaseException):
        self.interceptor = interceptor
        self.cause = cause

        super().__init__(
            f"Interceptor {interceptor.__class__.__name__} failed: {cause}"
        )
        self.__cause__ = cause


class ConfigurationError(HTTPClientException):
    """Ошибка конфигурации (например, невалидный сертификат)."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(exc: Exception, url: str) -> TransportFault:
    """
    Конвертировать requests.exceptions в TransportFault.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        TransportFault подходящего подкласса

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> fault = classify_requests_exception(exc, "https://example.com")
        >>> assert isinstance(fault, TimeoutError)
        >>> assert fault.timeout_type == "connect"
    """

    # ConnectTimeout наследуется и от ConnectionError, и от Timeout - проверяем первым
    if isinstance(exc, requests.exceptions.ConnectTimeout):
        return TimeoutError("Request timeout", url, exc, timeout_type="connect")

    elif isinstance(exc, requests.exceptions.ReadTimeout):
        return TimeoutError("Request timeout", url, exc, timeout_type="read")

    elif isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, exc)

    elif isinstance(exc, requests.exceptions.SSLError):
        return SSLError(f"TLS error: {exc}", url, exc)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError(f"Connection error: {exc}", url, exc)

    elif isinstance(exc, (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    )):
        return InvalidURLError(f"Invalid URL: {exc}", url, exc)

    else:
        # Любая другая ошибка ввода-вывода транспорта
        return TransportFault(f"Transport error: {exc}", url, exc)
