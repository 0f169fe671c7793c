"""Configuration management for examgen.

This module provides configuration classes using pydantic-settings
for environment variable management and validation.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SETTINGS_FILE = Path.home() / ".examgen" / "settings.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables with
    the EXAMGEN_ prefix. Values set here take precedence over the
    persisted settings store, and command-line flags take precedence
    over both.

    Attributes:
        api_key: Gemini API key. Overrides the persisted key when set.
        model: Preferred model identifier. Overrides the persisted model when set.
        base_url: Base URL for the Gemini REST API.
        timeout_seconds: HTTP timeout applied to every backend request.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        settings_file: Location of the persisted key/value settings file.

    Example:
        >>> # export EXAMGEN_MODEL=gemini-3-pro-preview
        >>> # export EXAMGEN_LOG_LEVEL=DEBUG
        >>>
        >>> settings = Settings()
        >>> print(settings.model)
        'gemini-3-pro-preview'

    Environment Variables:
        EXAMGEN_API_KEY: Gemini API key (optional)
        EXAMGEN_MODEL: Preferred model (optional)
        EXAMGEN_BASE_URL: Gemini API URL (default: https://generativelanguage.googleapis.com/v1beta)
        EXAMGEN_TIMEOUT_SECONDS: Timeout in seconds (default: 120.0)
        EXAMGEN_LOG_LEVEL: Logging level (default: WARNING)
        EXAMGEN_SETTINGS_FILE: Settings file path (default: ~/.examgen/settings.json)
    """

    model_config = SettingsConfigDict(
        env_prefix="EXAMGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend settings
    api_key: str | None = Field(
        default=None,
        repr=False,
        description="Gemini API key",
    )
    model: str | None = Field(
        default=None,
        description="Preferred model identifier",
    )
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL for the Gemini REST API",
    )
    timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="HTTP timeout for backend requests in seconds",
    )

    # General settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    settings_file: Path = Field(
        default=DEFAULT_SETTINGS_FILE,
        description="Path of the persisted key/value settings file",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level
