"""
Tests for the unifetch settings module.
"""

import pytest
from pydantic import ValidationError

from unifetch.settings import Settings


class TestSettings:
    """Test cases for the Settings class."""

    def test_default_settings(self, monkeypatch):
        """Test that default settings are correctly initialized."""
        for var in ("UNIFETCH_API_URL", "UNIFETCH_REQUEST_TIMEOUT", "UNIFETCH_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()

        assert settings.api_url == "http://localhost:8000/api"
        assert settings.request_timeout == 10.0
        assert settings.log_level == "INFO"

    def test_custom_settings(self):
        """Test settings with custom values."""
        settings = Settings(api_url="https://example.com/api/", request_timeout=3, log_level="DEBUG")

        assert settings.api_url == "https://example.com/api"
        assert settings.request_timeout == 3.0
        assert settings.log_level == "DEBUG"

    def test_environment_overrides(self, monkeypatch):
        """Test UNIFETCH_ environment variables are read."""
        monkeypatch.setenv("UNIFETCH_API_URL", "http://api.internal:9000/v1")
        monkeypatch.setenv("UNIFETCH_REQUEST_TIMEOUT", "2.5")

        settings = Settings()

        assert settings.api_url == "http://api.internal:9000/v1"
        assert settings.request_timeout == 2.5

    def test_invalid_api_url(self):
        """Test api_url must be an http(s) URL."""
        with pytest.raises(ValidationError):
            Settings(api_url="ftp://example.com")

    def test_invalid_timeout(self):
        """Test request_timeout must be positive."""
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)

    def test_invalid_log_level(self):
        """Test log_level must name a logging level."""
        with pytest.raises(ValidationError):
            Settings(log_level="VERBOSE")

    def test_invalid_log_level_from_environment(self, monkeypatch):
        """Test a bad UNIFETCH_LOG_LEVEL fails at settings load."""
        monkeypatch.setenv("UNIFETCH_LOG_LEVEL", "loud")

        with pytest.raises(ValidationError):
            Settings()

    def test_log_level_normalized(self):
        """Test log_level is upper-cased."""
        assert Settings(log_level="warning").log_level == "WARNING"

    def test_endpoint_url(self):
        """Test endpoint segments are joined onto the API root."""
        settings = Settings(api_url="http://localhost:8000/api")

        assert settings.endpoint_url("fruits") == "http://localhost:8000/api/fruits"
        assert settings.endpoint_url("/fruits/") == "http://localhost:8000/api/fruits"
