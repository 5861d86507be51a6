"""Logging configuration for the Gemini Relay application.
"""

import logging
import logging.config
from typing import Any, Dict

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers capped at a fixed level whatever the app level is.
# httpx logs every request at INFO; access logs duplicate the app's own.
LIBRARY_LOG_LEVELS = {
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def resolve_level(level: str | int) -> int:
    """Turns a level name like "debug" into its number; unknown names give the default."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LOG_LEVEL


def build_logging_config(level: str | int = DEFAULT_LOG_LEVEL) -> Dict[str, Any]:
    """Builds a dictConfig for the app and uvicorn, logging to stdout at `level`.

    The same dictionary is passed to uvicorn as its `log_config`.
    """
    app_level = resolve_level(level)
    loggers: Dict[str, Any] = {
        "": {"handlers": ["console"], "level": app_level},
    }
    for name, library_level in LIBRARY_LOG_LEVELS.items():
        loggers[name] = {
            "handlers": ["console"],
            "level": max(library_level, app_level),
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
    }


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    """Applies the logging configuration to the current process."""
    logging.config.dictConfig(build_logging_config(level))
