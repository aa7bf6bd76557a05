"""
Configuration module for the messages core.

This module uses Pydantic Settings to load and validate configuration from environment variables.
All settings are validated at startup time.
"""

import codecs
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvBaseSettings(BaseSettings):
    """
    Base class for settings sections.

    Important: nested settings are instantiated independently (via default_factory),
    so each section must know how to load from `.env` as well.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class DatabaseSettings(EnvBaseSettings):
    """Database connection settings for the configuration store."""

    url: str = Field(
        default="sqlite:///messages_core.db",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(default=False, description="Enable SQLAlchemy echo mode")

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Strip surrounding whitespace; an empty URL is not usable."""
        v = v.strip()
        if not v:
            raise ValueError("Database URL must not be empty")
        return v

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class KeywordSettings(EnvBaseSettings):
    """Blocked keyword import/export settings."""

    encoding: str = Field(default="utf-8", description="Text encoding of keyword files")
    default_export_filename: str = Field(
        default="blocked-keywords.txt",
        description="File name suggested for the first export",
    )

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, v: str) -> str:
        """The encoding must be known to the codecs registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    model_config = SettingsConfigDict(
        env_prefix="KEYWORDS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ShortcutSettings(EnvBaseSettings):
    """Conversation shortcut ranking settings."""

    short_label_max_length: int = Field(
        default=11, ge=1, description="Maximum length of a shortcut short label"
    )
    default_rank: int = Field(default=1, ge=1, description="Rank of presentable shortcuts")
    deprioritized_rank: int = Field(
        default=99, ge=1, description="Rank of present-but-not-preferred shortcuts"
    )

    @model_validator(mode="after")
    def check_rank_order(self) -> "ShortcutSettings":
        """The deprioritized rank must sort after the default rank."""
        if self.deprioritized_rank <= self.default_rank:
            raise ValueError("deprioritized_rank must be greater than default_rank")
        return self

    model_config = SettingsConfigDict(
        env_prefix="SHORTCUTS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class LoggingSettings(EnvBaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    json_logs: bool = Field(default=False, description="Enable JSON structured logging")
    log_file: Optional[Path] = Field(default=None, description="Path to log file")
    log_file_max_bytes: int = Field(default=10 * 1024 * 1024, description="Max log file size")
    log_file_backup_count: int = Field(default=5, description="Number of log file backups")

    @field_validator("log_file")
    @classmethod
    def create_log_dir(cls, v: Optional[Path]) -> Optional[Path]:
        """Ensure log directory exists."""
        if v is not None:
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(EnvBaseSettings):
    """Main application settings."""

    environment: Literal["development", "production", "testing"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Settings(EnvBaseSettings):
    """Root settings class that aggregates all configuration sections."""

    app: AppSettings = Field(default_factory=AppSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    keywords: KeywordSettings = Field(default_factory=KeywordSettings)
    shortcuts: ShortcutSettings = Field(default_factory=ShortcutSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # model_config inherited from EnvBaseSettings


# Singleton instance of settings
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the singleton settings instance.

    Returns:
        Settings: Application settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Force reload settings from environment.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Settings: Newly loaded settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
