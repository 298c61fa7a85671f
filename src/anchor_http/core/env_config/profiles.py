"""
Profile management for different environments.

A profile only selects which .env file is read: `.env.<profile>`.
"""

import os
from typing import Optional

PROFILE_ENV_VAR = "ANCHOR_HTTP_ENV"


def get_env_file_path(profile: Optional[str] = None) -> str:
    """
    Get .env file path for profile.

    Falls back to the ANCHOR_HTTP_ENV variable, then to plain `.env`.

    Example:
        >>> get_env_file_path("production")
        '.env.production'
        >>> get_env_file_path(None)
        '.env'
    """
    if profile is None:
        profile = detect_profile()

    if not profile:
        return ".env"

    return f".env.{profile}"


def detect_profile() -> Optional[str]:
    """Profile named by ANCHOR_HTTP_ENV, if any."""
    return os.getenv(PROFILE_ENV_VAR) or None
