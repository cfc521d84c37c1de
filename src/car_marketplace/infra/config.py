"""Application settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    database_url: str = ""
    sql_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle_seconds: int = 3600
    log_level: str = "INFO"

    # Serve every read from the built-in fixture catalog instead of the database
    demo_mode: bool = False

    # Fail-soft policies for the catalog pages
    filters_fallback_on_error: bool = True
    search_fail_soft: bool = True

    # Header carrying the authentication provider's user id
    auth_header: str = "X-User-Id"

    cache_invalidation_backend: str = "log"  # log or redis
    redis_url: str = "redis://localhost:6379/0"
    cache_invalidation_channel: str = "car_marketplace:cache:invalidate"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
