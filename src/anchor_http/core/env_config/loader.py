"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration.
"""

from typing import Optional

from ..config import HTTPClientConfig, SecurityConfig, TimeoutConfig, read_certificate_source
from ..logging.config import LoggingConfig
from .validator import HTTPClientSettings
from .profiles import get_env_file_path


def load_from_env(
    profile: Optional[str] = None,
    env_file: Optional[str] = None,
    **overrides
) -> HTTPClientConfig:
    """
    Load HTTPClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (HTTPClientSettings field names)
    2. Environment variables (ANCHOR_HTTP_*)
    3. .env file (profile-specific or default)
    4. Defaults

    Args:
        profile: Profile to load, selects `.env.<profile>`
        env_file: Custom .env file path (overrides profile)
        **overrides: Explicit setting overrides, e.g. read_timeout_ms=10000

    Returns:
        HTTPClientConfig instance

    Raises:
        pydantic.ValidationError: If a setting is invalid

    Example:
        >>> config = load_from_env(profile="production", read_timeout_ms=10000)
    """
    if env_file is None:
        env_file = get_env_file_path(profile)

    # Init kwargs win over env vars and the .env file
    settings = HTTPClientSettings(_env_file=env_file, **overrides)

    extra = ()
    if settings.ca_cert_path:
        extra = (read_certificate_source(settings.ca_cert_path),)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
            enable_correlation_id=settings.log_enable_correlation_id,
        )

    return HTTPClientConfig(
        timeout=TimeoutConfig(
            connect_ms=settings.connect_timeout_ms,
            read_ms=settings.read_timeout_ms,
        ),
        security=SecurityConfig(extra_ca_certificates=extra),
        logging=logging_config,
    )
