"""
Загрузка X.509 сертификатов.

Поддерживаются:
- PEM (в том числе bundle из нескольких сертификатов)
- DER (один сертификат)
- Системный набор доверенных CA (certifi)
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

import certifi
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from ..core.exceptions import ConfigurationError

PEM_MARKER = b"-----BEGIN"


def load_certificates(data: bytes) -> List[x509.Certificate]:
    """
    Загрузить все сертификаты из PEM bundle или один DER сертификат.

    Args:
        data: Сырые данные сертификата

    Returns:
        Список сертификатов в порядке следования в данных

    Raises:
        ConfigurationError: Данные не являются сертификатом

    Examples:
        >>> certs = load_certificates(Path("bundle.pem").read_bytes())
        >>> certs = load_certificates(Path("ca.der").read_bytes())
    """
    if not data:
        raise ConfigurationError("Certificate data is empty")

    try:
        if PEM_MARKER in data:
            return x509.load_pem_x509_certificates(data)
        return [x509.load_der_x509_certificate(data)]
    except ValueError as e:
        raise ConfigurationError(f"Unable to load X.509 certificate: {e}") from e


def load_certificate(data: bytes) -> x509.Certificate:
    """
    Загрузить ровно один сертификат (PEM или DER).

    Если PEM содержит несколько сертификатов, берётся первый.
    """
    return load_certificates(data)[0]


@lru_cache(maxsize=1)
def default_trust_anchors() -> Tuple[x509.Certificate, ...]:
    """
    Системные доверенные CA (Mozilla bundle из certifi).

    Загружаются один раз на процесс.
    """
    bundle = Path(certifi.where()).read_bytes()
    return tuple(x509.load_pem_x509_certificates(bundle))


def to_pem(certificate: x509.Certificate) -> str:
    """Сериализовать сертификат в PEM строку."""
    return certificate.public_bytes(Encoding.PEM).decode("ascii")
