"""Application configuration."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    APP_NAME: str = "platform-errors"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    # Root causes may carry internal identifiers; disable in environments where logs leave the host.
    LOG_ROOT_CAUSE: bool = True

    # Problem details
    # None renders "about:blank" as the problem type.
    ERROR_DOCUMENTATION_URL: Optional[str] = None
    REQUEST_ID_HEADER: str = "X-Request-ID"

    # In-process journal of recent errors for the stats endpoint
    ERROR_JOURNAL_SIZE: int = 500

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
