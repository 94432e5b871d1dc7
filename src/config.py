"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import (
    DEFAULT_DIREQT_API_ROOT,
    DEFAULT_FACEBOOK_API_ROOT,
    DEFAULT_PAGE_ACCESS_TOKEN,
    DEFAULT_PORT,
    DEFAULT_VERIFY_TOKEN,
    DIREQT_API_TIMEOUT_SECONDS,
    DIREQT_PLAYGROUND_API_KEY,
    FACEBOOK_API_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are frozen: they are built once at process start and passed to
    each component, never mutated afterwards.
    """

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        # Empty variables fall back to the defaults below
        env_ignore_empty=True,
    )

    # Facebook Configuration
    page_access_token: str = Field(
        default=DEFAULT_PAGE_ACCESS_TOKEN,
        description="Page access token from Messenger settings (Token Generation)",
    )
    verify_token: str = Field(
        default=DEFAULT_VERIFY_TOKEN,
        description="Webhook verification token provided to Facebook",
    )
    facebook_api_root: str = Field(
        default=DEFAULT_FACEBOOK_API_ROOT,
        description="Messenger Send API endpoint",
    )

    # Direqt Configuration
    direqt_api_key: str = Field(
        default=DIREQT_PLAYGROUND_API_KEY,
        description="Direqt API key (defaults to the playground key)",
    )
    direqt_api_secret: str | None = Field(
        default=None,
        description="Direqt API secret, only for custom configurations requiring basic auth",
    )
    direqt_api_root: str = Field(
        default=DEFAULT_DIREQT_API_ROOT,
        description="Direqt API root URL",
    )

    # Server
    port: int = Field(default=DEFAULT_PORT, description="HTTP listen port")

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for cloud logging"
    )

    # ==========================================================================
    # Timeout Configuration
    # ==========================================================================
    # Defaults are sourced from src/constants.py.

    facebook_api_timeout_seconds: float = Field(
        default=FACEBOOK_API_TIMEOUT_SECONDS,
        description="Timeout for Messenger Send API calls (seconds)",
    )
    direqt_api_timeout_seconds: float = Field(
        default=DIREQT_API_TIMEOUT_SECONDS,
        description="Timeout for Direqt fetch calls (seconds)",
    )

    @property
    def direqt_auth(self) -> tuple[str, str] | None:
        """Basic auth credentials for Direqt, only when a secret is configured."""
        if not self.direqt_api_secret:
            return None
        return (self.direqt_api_key, self.direqt_api_secret)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
