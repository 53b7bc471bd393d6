"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    STATEMENT_LEDGER_ prefix or a .env file. Components take these as
    explicit arguments; the cached instance is only a fallback.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATEMENT_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "statement-ledger"
    app_version: str = "0.1.0"

    # Transactions
    default_currency: str = Field(
        default="CHF",
        description="Currency assigned by a fresh TransactionBuilder",
    )

    # CSV output
    csv_delimiter: str = Field(
        default=",",
        description="Single character separating CSV columns",
    )

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("csv_delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """The csv module only accepts a one-character delimiter."""
        if len(v) != 1:
            raise ValueError(f"csv_delimiter must be a single character, got {v!r}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
