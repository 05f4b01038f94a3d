"""Configuration management for the application."""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./taskmanager.db")

    # JWT session tokens
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=120)  # 2 hours

    # Session cookie; outlives the token, expired tokens are rejected on use
    cookie_name: str = Field(default="token")
    cookie_max_age_days: int = Field(default=7)

    # Password hashing
    bcrypt_rounds: int = Field(default=10)

    # API
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    static_dir: str | None = Field(default=None)
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if self.debug:
                raise ValueError("DEBUG must be disabled in production")
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
    def token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.jwt_expiration_minutes)

    @property
    def cookie_max_age_seconds(self) -> int:
        return self.cookie_max_age_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
