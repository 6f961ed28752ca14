"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/trip.db"

    # Session credentials. No default: the app refuses to start without a secret.
    jwt_secret: str = Field(..., min_length=32)
    jwt_algorithm: str = "HS256"
    session_lifetime_days: int = 7
    session_cookie_name: str = "token"
    cookie_secure: bool = True  # site is served over TLS

    # Task board ordering
    position_gap: float = 10000.0

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_prefix: str = "/api"
    client_url: str = "http://localhost:5173"
    project_name: str = "Trip Planner"
    version: str = "1.0.0"

    # Rate limiting
    rate_limit_login_per_hour: int = 5      # per IP for login
    rate_limit_api_per_window: int = 100    # per user or IP for general API
    rate_limit_api_window_seconds: int = 900
    rate_limit_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
