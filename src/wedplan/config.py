"""Application settings."""

from decimal import Decimal
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    DB_PATH: Optional[str] = None

    # Budget
    TOTAL_BUDGET: Optional[Decimal] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    # API server
    PROJECT_NAME: str = "Wedplan API"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix="WEDPLAN_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
