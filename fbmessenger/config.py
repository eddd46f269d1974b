"""Library configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fbmessenger.constants import (
    FACEBOOK_GRAPH_API_URL,
    MESSENGER_API_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Messenger webhook configuration
    messenger_verify_token: str | None = Field(
        default=None, description="Webhook verification token"
    )
    messenger_app_secret: str | None = Field(
        default=None,
        description="Facebook App secret (optional, for signature verification)",
    )

    # Graph API
    graph_api_url: str = Field(
        default=FACEBOOK_GRAPH_API_URL,
        description="Graph API base URL, including the API version",
    )
    messenger_api_timeout_seconds: float = Field(
        default=MESSENGER_API_TIMEOUT_SECONDS,
        description="Timeout for Messenger Platform API calls (seconds)",
    )

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
