from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    HOST_NAME: str = "https://dealgenie.app"

    # Supabase (PostgREST + Auth)
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str | None = None
    # Scoring reads span users, so the store client uses the service role key
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_DIGEST_KEY: str = "dealgenie:digest:"

    # Email
    SENDGRID_API_KEY: str | None = None
    EMAIL_FROM: str = "noreply@dealgenie.app"

    # Shared secret for scheduled jobs; unset disables the check
    CRON_SECRET: str | None = None

    # Personalization
    ACTIVITY_HISTORY_LIMIT: int = 100
    DEFAULT_RECOMMENDATION_LIMIT: int = 5
    MAX_RECOMMENDATION_LIMIT: int = 10
    CANDIDATE_POOL_MAX: int = 30
    DIGEST_PICKS_LIMIT: int = 5

    AUTH_CACHE_TTL_SECONDS: int = 300


settings = Settings()

APP_VERSION = __version__
