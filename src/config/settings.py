"""Literacy engine settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Process-wide settings loaded from environment variables / .env file.

    Scoring business rules are NOT configured here; they live in
    ``src.scoring.config.ScoringConfig`` so the weighting table has a
    single source.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    # --- Analytics ---
    TREND_MONTHS: int = Field(
        default=6,
        ge=1,
        description="Most recent months kept in an organization summary trend.",
    )

    # --- Narrative context ---
    MIN_REQUIRED_RESPONDENTS: int = Field(
        default=5,
        ge=1,
        description="Responses required before insight context is produced.",
    )
    NARRATIVE_SAMPLE_LIMIT: int = Field(
        default=5,
        ge=0,
        description="Maximum free-text samples carried into insight context.",
    )
    NARRATIVE_SAMPLE_MAX_CHARS: int = Field(
        default=200,
        ge=1,
        description="Truncation length applied to each free-text sample.",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD


def get_settings() -> Settings:
    """Factory function for settings injection."""
    return Settings()
