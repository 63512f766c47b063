"""
rowcheck Settings Configuration

This module provides centralized configuration management using Pydantic settings.
Configuration is loaded from .env by default; alternative YAML loading is supported.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidationSettings(BaseSettings):
    """
    Field rule limits: string length caps, name minimum length,
    and the phone digit count with the punctuation ignored when counting.
    """

    model_config = SettingsConfigDict(env_prefix="ROWCHECK_", extra="ignore")

    max_string_length: int = Field(default=255, ge=1, description="Max length for email, names and error text")
    name_min_length: int = Field(default=2, ge=0, description="Min length for first/last names")
    phone_digits: int = Field(default=10, ge=1, description="Exact digit count required in a phone number")
    phone_ignored_characters: str = Field(
        default="-.()",
        description="Punctuation stripped from a phone number before checking it",
    )

    @field_validator("phone_ignored_characters")
    @classmethod
    def validate_phone_ignored_characters(cls, v: str) -> str:
        if any(ch.isdigit() for ch in v):
            raise ValueError("phone_ignored_characters must not contain digits")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration: level and format (json/console)."""

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_format: str = Field(default="console", description="Format: 'json' or 'console'")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = ("json", "console")
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = v.upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u


class Settings(BaseSettings):
    """
    Root settings class. Loads from .env by default; supports creation from YAML.

    Nested models: validation, logging.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    validation: ValidationSettings = Field(default_factory=ValidationSettings, description="Field rule config")
    logging: LoggingSettings = Field(default_factory=LoggingSettings, description="Logging config")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Create Settings from a YAML file. Top-level keys should match
        nested model names (validation, logging).
        Environment variables still override when present.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        kwargs: dict[str, Any] = {}
        for name, model_class in [
            ("validation", ValidationSettings),
            ("logging", LoggingSettings),
        ]:
            if name in data and isinstance(data[name], dict):
                kwargs[name] = model_class.model_validate(data[name])
        return cls(**kwargs)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance (loads from .env)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
