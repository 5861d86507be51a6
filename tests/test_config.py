"""Tests for the configuration loading.
"""

import os
from unittest.mock import patch

import pytest

from gemini_relay.core.config import Settings, require_api_key
from gemini_relay.core.errors import ConfigurationError, ErrorKind


def test_settings_loading_directly():
    """Test that Settings can be initialized directly with values.

    Bypasses environment variables and .env files.
    """
    test_values = {
        "environment": "testing",
        "GEMINI_API_KEY": "test-key",
        "GEMINI_MODEL": "gemini-1.5-flash",
        "GEMINI_REQUEST_TIMEOUT": 30.0,
        "api_port": 8080,
    }
    settings = Settings(**test_values, _env_file=None)

    assert settings.environment == "testing"
    assert settings.GEMINI_API_KEY == "test-key"
    assert settings.GEMINI_MODEL == "gemini-1.5-flash"
    assert settings.GEMINI_REQUEST_TIMEOUT == 30.0
    assert settings.api_port == 8080


def test_settings_defaults():
    """Test that Settings use default values when environment variables are not set."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.environment == "development"
    assert settings.GEMINI_API_KEY is None
    assert settings.GEMINI_MODEL == "gemini-1.5-pro"
    assert settings.api_port == 5000
    assert settings.cors_allow_origins == ["*"]


def test_settings_read_from_environment():
    with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key", "GEMINI_MODEL": "gemini-pro"}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.GEMINI_API_KEY == "env-key"
    assert settings.GEMINI_MODEL == "gemini-pro"


def test_blank_api_key_counts_as_missing():
    settings = Settings(GEMINI_API_KEY="   ", _env_file=None)
    assert settings.GEMINI_API_KEY is None


def test_require_api_key_raises_configuration_error():
    settings = Settings(GEMINI_API_KEY=None, _env_file=None)

    with pytest.raises(ConfigurationError) as exc_info:
        require_api_key(settings)

    assert exc_info.value.kind is ErrorKind.CONFIGURATION


def test_require_api_key_returns_key():
    settings = Settings(GEMINI_API_KEY="abc", _env_file=None)
    assert require_api_key(settings) == "abc"
