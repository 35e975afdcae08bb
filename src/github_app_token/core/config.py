"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # GitHub API - override the URL for GitHub Enterprise Server
    github_api_url: HttpUrl = Field(default=HttpUrl(DEFAULT_GITHUB_API_URL))
    github_api_version: str = "2022-11-28"
    http_timeout: float = Field(default=30.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept log levels in any case."""
        return value.lower()

    @property
    def api_base_url(self) -> str:
        """GitHub API URL without a trailing slash."""
        return str(self.github_api_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
