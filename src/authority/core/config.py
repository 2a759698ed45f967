"""Configuration management for Authority.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once and is
immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTHORITY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Authority"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    external_url: str = "http://localhost:8000"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./auth_data/authority.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False
    db_sqlite_foreign_keys: bool = True

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Throttle Settings
    throttle_enabled: bool = True
    throttle_attempt_limit: int = Field(
        default=5,
        description="Failed login attempts before the user is suspended",
    )
    throttle_suspension_minutes: int = 15
    throttle_ban_attempt_limit: int = Field(
        default=15,
        description="Failed login attempts before the user is banned for good",
    )

    # Activation Settings
    activation_code_bytes: int = 32
    activation_path: str = "/users/{user_id}/activate/{code}"

    # Email Settings
    email_provider: Literal["console", "smtp"] = "console"
    email_from_address: str = "noreply@authority.local"
    email_from_name: str = "Authority"
    welcome_subject: str = "Welcome to Authority"
    resend_subject: str = "Activate your account"

    # SMTP Settings
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout: int = 10

    @field_validator(
        "throttle_attempt_limit",
        "throttle_suspension_minutes",
        "throttle_ban_attempt_limit",
        "activation_code_bytes",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero and negative limits."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @model_validator(mode="after")
    def validate_throttle_limits(self) -> "Settings":
        """Validate that a ban can never come before a suspension."""
        if self.throttle_ban_attempt_limit < self.throttle_attempt_limit:
            raise ValueError(
                "throttle_ban_attempt_limit must be greater than or equal to "
                f"throttle_attempt_limit ({self.throttle_attempt_limit})"
            )
        return self

    @model_validator(mode="after")
    def validate_smtp(self) -> "Settings":
        """Validate that the SMTP provider has somewhere to connect to."""
        if self.email_provider == "smtp" and not self.smtp_host:
            raise ValueError("smtp_host is required when email_provider is 'smtp'")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    def activation_url(self, user_id: str, code: str) -> str:
        """Build the link a user follows to activate their account."""
        path = self.activation_path.format(user_id=user_id, code=code)
        return f"{self.external_url.rstrip('/')}{path}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
