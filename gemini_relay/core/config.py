"""Configuration module for Gemini Relay.

This module handles all application configuration using pydantic-settings.
Values come from environment variables or a local .env file.
"""

import logging
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pydantic import Field, field_validator

from gemini_relay.core.errors import ConfigurationError

# Explicitly load .env file BEFORE BaseSettings reads environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings class.

    This class defines all configuration settings for the application.
    Settings are loaded from environment variables with appropriate defaults.
    """

    # Application settings
    environment: str = "development"
    debug: bool = False

    # --- Gemini API Settings ---
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        description="API Key for the Google Gemini API. Required; the server refuses to start without it."
    )
    GEMINI_MODEL: str = Field(default="gemini-1.5-pro", description="Gemini model used for both calls.")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Root URL of the Gemini REST API."
    )
    GEMINI_REQUEST_TIMEOUT: float = Field(
        default=120.0,
        description="Timeout in seconds applied by the HTTP transport to each Gemini call.",
        gt=0
    )

    # API Server Configuration (for uvicorn)
    api_host: str = Field(default="0.0.0.0", description="Host for the FastAPI server.")
    api_port: int = Field(default=5000, description="Port for the FastAPI server.")
    api_reload: bool = Field(default=False, description="Enable auto-reload for the FastAPI server (development).")
    api_log_level: str = Field(default="info", description="Log level for the FastAPI server.")

    # Cross-origin requests are allowed from anywhere unless narrowed here
    cors_allow_origins: List[str] = Field(default=["*"], description="Origins allowed by the CORS middleware.")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator("GEMINI_API_KEY")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings: The application settings loaded from env/.env.
    """
    return Settings()


def require_api_key(settings: Settings) -> str:
    """Returns the Gemini API key or raises ConfigurationError if it is missing.

    Args:
        settings: The loaded application settings.

    Returns:
        The configured API key.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is unset or blank.
    """
    if not settings.GEMINI_API_KEY:
        logger.critical("GEMINI_API_KEY not found in environment or .env file.")
        raise ConfigurationError(
            "GEMINI_API_KEY is not configured. Set it in the environment or a .env file."
        )
    return settings.GEMINI_API_KEY
