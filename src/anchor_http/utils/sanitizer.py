# src/anchor_http/utils/sanitizer.py
"""
Маскирование чувствительных данных перед записью в лог.

Используется HTTPClientLogger (все structured поля) и LoggingInterceptor
(заголовки запроса), чтобы токены, пароли и API ключи не попадали в логи.
"""

import re
from typing import Any, Iterable, List, Tuple

DEFAULT_MASK = "***REDACTED***"

# Имена полей и заголовков, значения которых маскируются целиком.
# Совпадение по подстроке, без учета регистра.
SENSITIVE_KEYS = {
    'password', 'passwd', 'pwd',
    'token', 'jwt',
    'secret',
    'api_key', 'apikey', 'api-key', 'private_key',
    'authorization', 'auth',
    'cookie', 'session',
    'credentials',
    'otp', 'cvv', 'cvc', 'card_number',
}

# Шаблоны для поиска секретов внутри произвольных строк
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1{mask}'),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1{mask}'),
    (re.compile(r'(api[_-]?key[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1{mask}'),
    (re.compile(r'(token[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1{mask}'),
    (re.compile(r'(password[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1{mask}'),
]


def is_sensitive_key(key: Any) -> bool:
    """True если имя поля или заголовка считается чувствительным."""
    key_lower = str(key).lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)


def mask_sensitive_data(data: Any, mask: str = DEFAULT_MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в dict/list/tuple/str.

    Возвращает копию; исходные данные не меняются. Значения других типов
    возвращаются как есть.

    Examples:
        >>> mask_sensitive_data({"user": "alice", "password": "secret123"})
        {'user': 'alice', 'password': '***REDACTED***'}

        >>> mask_sensitive_data("Authorization: Bearer abc.def")
        'Authorization: Bearer ***REDACTED***'
    """
    if isinstance(data, str):
        return _mask_string(data, mask)

    if isinstance(data, dict):
        return {
            key: mask if is_sensitive_key(key) else mask_sensitive_data(value, mask)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def _mask_string(text: str, mask: str) -> str:
    # re.sub treats the replacement as a template, escape the mask
    escaped = mask.replace('\\', r'\\')
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement.format(mask=escaped), text)
    return text


def mask_headers(
    headers: Iterable[Tuple[str, str]],
    mask: str = DEFAULT_MASK
) -> List[Tuple[str, str]]:
    """
    Маскирует значения чувствительных заголовков.

    Принимает пары (name, value), порядок и повторяющиеся имена
    сохраняются.

    Examples:
        >>> mask_headers([("Authorization", "Bearer t"), ("Accept", "application/json")])
        [('Authorization', '***REDACTED***'), ('Accept', 'application/json')]
    """
    return [
        (name, mask if is_sensitive_key(name) else value)
        for name, value in headers
    ]


def add_sensitive_keys(*keys: str) -> None:
    """
    Добавляет ключи в SENSITIVE_KEYS (case-insensitive).

    Examples:
        >>> add_sensitive_keys('x-internal-sig')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())


def remove_sensitive_keys(*keys: str) -> None:
    """Удаляет ключи из SENSITIVE_KEYS."""
    for key in keys:
        SENSITIVE_KEYS.discard(key.lower())


def get_sensitive_keys() -> set:
    """Копия текущего набора чувствительных ключей."""
    return SENSITIVE_KEYS.copy()
