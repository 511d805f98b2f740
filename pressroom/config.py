"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded outside dev defaults)
    - get_settings() is cached (lru_cache) — single instance per process
    - CDN base URLs always end with "/"
    - data_cache_ttl_seconds and page_revalidate_seconds are independent knobs

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://pressroom:pressroom@db:5432/pressroom"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Caching & revalidation
    data_cache_ttl_seconds: int = 3600
    page_revalidate_seconds: int = 3600
    posts_per_page: int = 9
    prerender_on_startup: bool = False

    # CDN
    cdn_image_base_url: str = "https://i.cdn.example.com/"
    cdn_thumbnail_base_url: str = "https://cdn.example.com/"
    cdn_upload_url: str = "https://cdn.example.com/api/upload"
    cdn_upload_api_key: str = ""
    cdn_upload_timeout_seconds: float = 30.0
    cdn_upload_max_bytes: int = 5 * 1024 * 1024

    @field_validator("cdn_image_base_url", "cdn_thumbnail_base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"

    # Sessions
    session_secret: str = "dev-insecure-session-secret"
    session_max_age_seconds: int = 60 * 60 * 24 * 30
    session_cookie_name: str = "pressroom_session"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
