"""Tests for the logging configuration."""

import logging

from gemini_relay.core.logging_config import build_logging_config, resolve_level


def test_build_logging_config_uses_requested_level():
    config = build_logging_config("debug")

    assert config["loggers"][""]["level"] == logging.DEBUG
    assert config["loggers"][""]["handlers"] == ["console"]
    # Noisy libraries stay capped even when the app logs at DEBUG
    assert config["loggers"]["httpx"]["level"] == logging.WARNING
    assert config["loggers"]["uvicorn.access"]["level"] == logging.WARNING


def test_build_logging_config_raises_library_levels_with_app_level():
    config = build_logging_config("error")

    assert config["loggers"][""]["level"] == logging.ERROR
    assert config["loggers"]["uvicorn.error"]["level"] == logging.ERROR
    assert config["loggers"]["httpx"]["level"] == logging.ERROR


def test_resolve_level():
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(logging.DEBUG) == logging.DEBUG
    assert resolve_level("not-a-level") == logging.INFO


def test_app_logger_has_handler_after_import():
    """Importing the app configures logging, so uvicorn-launched servers still log."""
    import gemini_relay.main  # noqa: F401

    handlers = logging.getLogger().handlers
    assert any(
        isinstance(h, logging.StreamHandler) and h.formatter is not None
        and h.formatter._fmt == build_logging_config()["formatters"]["default"]["format"]
        for h in handlers
    )
