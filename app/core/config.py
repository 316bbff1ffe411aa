"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every setting has a default so the service starts against a local
    PocketBase and Redis without any configuration.
    """

    # App
    app_name: str = "task-track"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "*"

    # Record store (PocketBase)
    pocketbase_url: str = "http://127.0.0.1:8090"
    pocketbase_token: SecretStr | None = None
    pocketbase_timeout_seconds: float = 30.0

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_connect_timeout_seconds: float = 10.0
    redis_max_connections: int = 10
    # Wait between attempts to rebuild an owned client after Redis became unreachable.
    redis_reconnect_interval_seconds: float = 5.0
    cache_ttl_seconds: int = 300
    # Also evict <ns>:<id> on update/delete. Off keeps per-id entries until TTL expiry.
    cache_invalidate_by_id: bool = False

    # List defaults
    default_page_size: int = 50
    default_sort: str = "-created"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Reject values the cache and list layers cannot work with."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"CACHE_TTL_SECONDS must be positive, got: {self.cache_ttl_seconds}"
            )
        if self.default_page_size <= 0:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE must be positive, got: {self.default_page_size}"
            )
        if not self.pocketbase_url.startswith(("http://", "https://")):
            raise ValueError(
                f"POCKETBASE_URL must be an http(s) URL, got: {self.pocketbase_url!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
