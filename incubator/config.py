"""
Configuration management using pydantic-settings and python-dotenv
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./incubator.db",
        description="Async database connection URL",
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL queries for debugging",
    )
    STORAGE_BACKEND: Optional[str] = Field(
        default=None,
        pattern="^(memory|database)$",
        description="Persistence backend; derived from ENVIRONMENT when unset",
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Application environment"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    # Questions
    MAX_SUGGESTED_QUESTIONS: int = Field(
        default=5,
        ge=1,
        description="Maximum number of questions returned per generation round"
    )
    SEED_DEFAULT_QUESTIONS: bool = Field(
        default=True,
        description="Seed the generic question set when the store is empty"
    )
    DEFAULT_APP_VERSION: str = Field(
        default="1.0.0",
        description="Version string written into new user settings"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def storage_backend(self) -> str:
        if self.STORAGE_BACKEND:
            return self.STORAGE_BACKEND
        return "database" if self.ENVIRONMENT == "production" else "memory"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
