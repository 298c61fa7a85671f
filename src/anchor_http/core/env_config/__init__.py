"""
Environment configuration for anchor-http-client.

Load configuration from .env files and ANCHOR_HTTP_* environment variables.

Example:
    >>> from anchor_http.core.env_config import load_from_env
    >>>
    >>> config = load_from_env()
    >>> config = load_from_env(profile="production")
    >>> config = load_from_env(read_timeout_ms=10000)
"""

from .loader import load_from_env
from .validator import HTTPClientSettings
from .profiles import PROFILE_ENV_VAR, detect_profile, get_env_file_path

__all__ = [
    "load_from_env",
    "HTTPClientSettings",
    "PROFILE_ENV_VAR",
    "detect_profile",
    "get_env_file_path",
]
