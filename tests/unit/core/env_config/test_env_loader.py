"""
Tests for environment configuration loading.
"""

import os

import pytest
from pydantic import ValidationError

from anchor_http.core.config import HTTPClientConfig
from anchor_http.core.env_config import (
    HTTPClientSettings,
    detect_profile,
    get_env_file_path,
    load_from_env,
)
from anchor_http.core.logging.config import LogFormat, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No ANCHOR_HTTP_* variables, no stray .env in the working directory."""
    for key in list(os.environ):
        if key.startswith("ANCHOR_HTTP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class TestLoadFromEnv:
    """Test load_from_env function."""

    def test_defaults(self):
        config = load_from_env()

        assert isinstance(config, HTTPClientConfig)
        assert config.timeout.connect_ms == 3000
        assert config.timeout.read_ms == 3000
        assert config.security.extra_ca_certificates == ()
        assert config.logging is None

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_HTTP_CONNECT_TIMEOUT_MS", "1000")
        monkeypatch.setenv("ANCHOR_HTTP_READ_TIMEOUT_MS", "15000")

        config = load_from_env()

        assert config.timeout.connect_ms == 1000
        assert config.timeout.read_ms == 15000

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("ANCHOR_HTTP_READ_TIMEOUT_MS=9000\n")

        assert load_from_env(env_file=str(env_file)).timeout.read_ms == 9000

    def test_profile_file(self, tmp_path):
        (tmp_path / ".env.staging").write_text("ANCHOR_HTTP_CONNECT_TIMEOUT_MS=250\n")

        assert load_from_env(profile="staging").timeout.connect_ms == 250

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_HTTP_READ_TIMEOUT_MS", "15000")

        assert load_from_env(read_timeout_ms=500).timeout.read_ms == 500

    def test_env_var_wins_over_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("ANCHOR_HTTP_READ_TIMEOUT_MS=100\n")
        monkeypatch.setenv("ANCHOR_HTTP_READ_TIMEOUT_MS", "200")

        assert load_from_env().timeout.read_ms == 200

    def test_ca_cert_path(self, tmp_path, pki):
        ca_file = tmp_path / "corp-ca.pem"
        ca_file.write_bytes(pki.root_pem)

        config = load_from_env(ca_cert_path=str(ca_file))

        assert config.security.extra_ca_certificates == (pki.root_pem,)

    def test_missing_ca_cert_path(self, tmp_path):
        with pytest.raises(ValidationError, match="CA certificate file not found"):
            load_from_env(ca_cert_path=str(tmp_path / "missing.pem"))

    def test_logging_enabled(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANCHOR_HTTP_LOG_ENABLED", "true")
        monkeypatch.setenv("ANCHOR_HTTP_LOG_LEVEL", "debug")
        monkeypatch.setenv("ANCHOR_HTTP_LOG_FORMAT", "JSON")
        monkeypatch.setenv("ANCHOR_HTTP_LOG_FILE_PATH", str(tmp_path / "app.log"))

        logging_config = load_from_env().logging

        assert logging_config.level == LogLevel.DEBUG
        assert logging_config.format == LogFormat.JSON
        assert logging_config.enable_file is True
        assert logging_config.file_path == str(tmp_path / "app.log")

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            load_from_env(read_timeout_ms=0)


class TestHTTPClientSettings:
    def test_logging_without_output_rejected(self):
        with pytest.raises(ValidationError, match="no output"):
            HTTPClientSettings(_env_file=None, log_enabled=True, log_enable_console=False)

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            HTTPClientSettings(_env_file=None, log_level="LOUD")


class TestProfiles:
    def test_env_file_for_profile(self):
        assert get_env_file_path("production") == ".env.production"

    def test_default_env_file(self):
        assert get_env_file_path(None) == ".env"

    def test_profile_from_env_var(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_HTTP_ENV", "staging")

        assert detect_profile() == "staging"
        assert get_env_file_path() == ".env.staging"
