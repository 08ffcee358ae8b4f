"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Secrets (auth_token) come from environment variables, never hardcoded
    - get_settings() is cached (lru_cache): single instance per process
    - request_timeout_seconds applies uniformly to every outbound request
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Outbound API (client side)
    api_base_url: str = "http://localhost:3001/api"
    request_timeout_seconds: float = 10.0
    auth_token: str | None = None

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Demo API (server side)
    environment: str = "development"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:5174"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
