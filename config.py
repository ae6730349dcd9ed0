"""
Configuration settings for the subnet-trainer service.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Database
    # ========================================
    database_url: str = Field(
        default="sqlite:///practice_sessions.db",
        description="SQLAlchemy connection string for practice session history",
    )

    # ========================================
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8100,
        description="API server port",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # ========================================
    # Presentation
    # ========================================
    default_locale: str = Field(
        default="en",
        description="Locale used for prompts, labels and explanations when none is requested",
    )
    supported_locales: str = Field(
        default="en,nl",
        description="Comma-separated locales with a phrase table",
    )

    # ========================================
    # Question Generation
    # ========================================
    ip_sampling_max_attempts: int = Field(
        default=100,
        ge=1,
        description="Upper bound on rejection-sampling draws for a random public IPv4 address",
    )

    # ========================================
    # Practice Sessions & Progress
    # ========================================
    recent_activity_limit: int = Field(
        default=10,
        ge=1,
        description="Number of recent practice sessions shown in the progress summary",
    )
    cli_questions_per_session: int = Field(
        default=10,
        ge=1,
        description="Default number of questions in a CLI drill",
    )

    def get_supported_locales(self) -> list[str]:
        """Get supported locales as a list."""
        return [locale.strip().lower() for locale in self.supported_locales.split(",") if locale.strip()]

    def get_generation_config(self) -> dict[str, Any]:
        """Get question generation configuration as a dictionary."""
        return {
            "default_locale": self.default_locale,
            "locales": self.get_supported_locales(),
            "ip_sampling_max_attempts": self.ip_sampling_max_attempts,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
