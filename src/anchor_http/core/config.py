"""
Система конфигурации для anchor-http-client.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

import os
from dataclasses import dataclass, field
from typing import IO, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

# Что можно передать как дополнительный сертификат
CertificateSource = Union[bytes, bytearray, str, "os.PathLike[str]", IO[bytes]]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect_ms: Таймаут подключения (мс)
        read_ms: Таймаут чтения данных (мс)

    Examples:
        >>> TimeoutConfig()                       # 3000 / 3000
        >>> TimeoutConfig(connect_ms=1000, read_ms=10000)
    """
    connect_ms: int = 3000
    read_ms: int = 3000

    def __post_init__(self):
        """Валидация."""
        if self.connect_ms <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read_ms <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) в секундах для requests."""
        return (self.connect_ms / 1000, self.read_ms / 1000)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    Конфигурация доверия TLS.

    Дополнительные CA сертификаты доверяются вместе с системными,
    а не вместо них.

    Args:
        extra_ca_certificates: PEM или DER данные дополнительных CA

    Examples:
        >>> SecurityConfig()
        >>> SecurityConfig(extra_ca_certificates=(pem_bytes,))
    """
    extra_ca_certificates: Tuple[bytes, ...] = ()

    def __post_init__(self):
        """Привести к tuple of bytes."""
        normalized = tuple(bytes(cert) for cert in self.extra_ca_certificates)
        for cert in normalized:
            if not cert:
                raise ValueError("extra CA certificate must not be empty")
        object.__setattr__(self, 'extra_ca_certificates', normalized)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def read_certificate_source(source: CertificateSource) -> bytes:
    """
    Прочитать сертификат из bytes, пути к файлу или бинарного потока.

    Поток читается полностью и закрывается.

    Args:
        source: bytes, путь (str / PathLike) или объект с методом read()

    Returns:
        Сырые данные сертификата (PEM или DER)
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, os.PathLike)):
        with open(source, 'rb') as f:
            return f.read()

    if hasattr(source, 'read'):
        with source:
            data = source.read()
        if isinstance(data, str):
            raise TypeError("certificate stream must be opened in binary mode")
        return bytes(data)

    raise TypeError(
        f"Unsupported certificate source: {type(source).__name__}"
    )


@dataclass(frozen=True)
class HTTPClientConfig:
    """
    Главная конфигурация HTTPClient.

    Immutable конфигурация для потокобезопасности.

    Args:
        timeout: Конфигурация таймаутов
        security: Конфигурация доверия TLS
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = HTTPClientConfig()
        >>> config = HTTPClientConfig.create(read_timeout_ms=10000, certificate="ca.pem")
    """
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: Optional['LoggingConfig'] = None

    @classmethod
    def create(
        cls,
        read_timeout_ms: int = 3000,
        connect_timeout_ms: int = 3000,
        certificate: Optional[CertificateSource] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'HTTPClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            read_timeout_ms: Таймаут чтения (мс)
            connect_timeout_ms: Таймаут подключения (мс)
            certificate: Дополнительный CA (bytes, путь или бинарный поток)
            logging: Конфигурация логирования (None = отключить логирование)

        Returns:
            HTTPClientConfig instance

        Examples:
            >>> config = HTTPClientConfig.create(read_timeout_ms=5000)
            >>> with open("ca.der", "rb") as f:
            ...     config = HTTPClientConfig.create(certificate=f)
        """
        extra = ()
        if certificate is not None:
            extra = (read_certificate_source(certificate),)

        return cls(
            timeout=TimeoutConfig(connect_ms=connect_timeout_ms, read_ms=read_timeout_ms),
            security=SecurityConfig(extra_ca_certificates=extra),
            logging=logging,
        )

    def with_timeout(
        self,
        connect_ms: Optional[int] = None,
        read_ms: Optional[int] = None
    ) -> 'HTTPClientConfig':
        """
        Создать новый конфиг с изменёнными таймаутами.

        Example:
            >>> new_config = config.with_timeout(read_ms=60000)
        """
        timeout_cfg = TimeoutConfig(
            connect_ms=connect_ms if connect_ms is not None else self.timeout.connect_ms,
            read_ms=read_ms if read_ms is not None else self.timeout.read_ms,
        )

        return HTTPClientConfig(
            timeout=timeout_cfg,
            security=self.security,
            logging=self.logging
        )

    def with_certificate(self, certificate: CertificateSource) -> 'HTTPClientConfig':
        """
        Создать новый конфиг с ещё одним доверенным CA.

        Example:
            >>> new_config = config.with_certificate(Path("corp-ca.pem"))
        """
        security_cfg = SecurityConfig(
            extra_ca_certificates=self.security.extra_ca_certificates
            + (read_certificate_source(certificate),)
        )

        return HTTPClientConfig(
            timeout=self.timeout,
            security=security_cfg,
            logging=self.logging
        )
