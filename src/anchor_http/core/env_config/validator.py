"""
Pydantic validators for environment configuration.

Provides a validated settings model for all configuration options.
"""

from pathlib import Path
from typing import Optional, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HTTPClientSettings(BaseSettings):
    """
    HTTPClient configuration from environment variables.

    Reads from:
    1. Environment variables (ANCHOR_HTTP_*)
    2. .env file
    3. Defaults

    Example .env file:
        ANCHOR_HTTP_CONNECT_TIMEOUT_MS=1000
        ANCHOR_HTTP_READ_TIMEOUT_MS=10000
        ANCHOR_HTTP_CA_CERT_PATH=/etc/ssl/corp-ca.pem
        ANCHOR_HTTP_LOG_ENABLED=true
        ANCHOR_HTTP_LOG_LEVEL=DEBUG
        ANCHOR_HTTP_LOG_FORMAT=json

    Usage:
        >>> settings = HTTPClientSettings()
        >>> settings.read_timeout_ms
        3000
    """

    model_config = SettingsConfigDict(
        env_prefix='ANCHOR_HTTP_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Timeouts (milliseconds)
    connect_timeout_ms: int = Field(default=3000, gt=0)
    read_timeout_ms: int = Field(default=3000, gt=0)

    # Extra trusted CA (PEM or DER file)
    ca_cert_path: Optional[str] = Field(default=None, description="Additional CA certificate")

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_correlation_id: bool = Field(default=True)

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator('ca_cert_path')
    @classmethod
    def validate_ca_cert_path(cls, v: Optional[str]) -> Optional[str]:
        """The CA file must exist when given."""
        if v and not Path(v).is_file():
            raise ValueError(f"CA certificate file not found: {v}")
        return v or None

    @model_validator(mode='after')
    def validate_log_outputs(self) -> 'HTTPClientSettings':
        if self.log_enabled and not self.log_enable_console and not self.log_file_path:
            raise ValueError(
                "logging is enabled but has no output: "
                "enable console or set log_file_path"
            )
        return self
