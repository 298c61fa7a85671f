"""
Utility functions for HTTP client.

Includes:
- Status code classification
- Response body decoding
- Header folding for the requests transport
- URL sanitization for safe logging
"""

from typing import Dict, Iterable, Optional, Set, Tuple
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse


# Default sensitive parameter names that should be masked in logs
DEFAULT_SENSITIVE_PARAMS = {
    'api_key',
    'apikey',
    'api-key',
    'token',
    'access_token',
    'refresh_token',
    'key',
    'secret',
    'password',
    'auth',
    'authorization',
    'client_secret',
    'session',
    'session_id',
}


def is_successful(status_code: int) -> bool:
    """True for [200, 300): received, understood and accepted."""
    return 200 <= status_code <= 299


def is_redirect(status_code: int) -> bool:
    """True for [300, 400)."""
    return 300 <= status_code <= 399


def decode_body(data: Optional[bytes]) -> str:
    """Decode a response body as UTF-8; malformed sequences become U+FFFD."""
    if not data:
        return ""
    return data.decode('utf-8', errors='replace')


def is_secure_url(url: str) -> bool:
    """True if the URL scheme is https."""
    return urlparse(url).scheme.lower() == 'https'


def fold_headers(headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Fold repeated header names into one comma-joined field line.

    requests sends one line per header name; RFC 9110 §5.3 makes
    `X: a` + `X: b` equivalent to `X: a, b`. The first spelling of a name
    is kept and order of values is preserved.

    Examples:
        >>> fold_headers([("Accept", "application/json"), ("accept", "text/plain")])
        {'Accept': 'application/json, text/plain'}
    """
    folded: Dict[str, str] = {}
    spelling: Dict[str, str] = {}

    for name, value in headers:
        key = name.lower()
        if key in spelling:
            original = spelling[key]
            folded[original] = f"{folded[original]}, {value}"
        else:
            spelling[key] = name
            folded[name] = value

    return folded


def sanitize_url(
    url: str,
    extra_params: Optional[Set[str]] = None,
    mask: str = 'REDACTED'
) -> str:
    """
    Mask sensitive query parameters in URL for safe logging.

    Args:
        url: The URL to sanitize
        extra_params: Additional parameter names to mask (case-insensitive)
        mask: The string to use for masking (default: 'REDACTED')

    Returns:
        Sanitized URL with sensitive parameters masked

    Examples:
        >>> sanitize_url('https://api.example.com/data?api_key=secret123')
        'https://api.example.com/data?api_key=REDACTED'

        >>> sanitize_url('https://api.example.com/data?user=john&token=abc123')
        'https://api.example.com/data?user=john&token=REDACTED'
    """
    if not url:
        return url

    sensitive_params = DEFAULT_SENSITIVE_PARAMS | (
        {p.lower() for p in extra_params} if extra_params else set()
    )

    try:
        parsed = urlparse(url)
    except ValueError:
        # Don't risk exposing the original URL
        return '<unparseable url>'

    if not parsed.query:
        return url

    params = parse_qs(parsed.query, keep_blank_values=True)

    sanitized_params = {}
    for param_name, param_values in params.items():
        if param_name.lower() in sensitive_params:
            sanitized_params[param_name] = [mask] * len(param_values)
        else:
            sanitized_params[param_name] = param_values

    new_query = urlencode(sanitized_params, doseq=True)
    return urlunparse(parsed._replace(query=new_query))
