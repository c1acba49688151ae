"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, cache backend and timing bounds).
    """

    # App
    app_name: str = "nearh"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg). Empty URL leaves the SQL engine unconfigured.
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    access_token_cookie_name: str = "access_token"
    access_token_cookie_secure: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Cache backend: "redis", "memory" (single process) or "none"
    cache_backend: str = "redis"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Cache policy
    cache_version: str = "v1"
    cache_ttl_profile: int = 3600
    cache_ttl_master: int = 86400
    # Profile reads sit on the hot path of every request; master reads tolerate more.
    profile_cache_timeout_seconds: float = 0.5
    master_cache_timeout_seconds: float = 2.0
    master_fetch_retries: int = 3
    master_fetch_retry_base_delay: float = 1.0
    background_drain_timeout_seconds: float = 5.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env, cache backend and cache timing bounds."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.cache_backend not in ("redis", "memory", "none"):
            raise ValueError(
                f"cache_backend must be 'redis', 'memory' or 'none', got: {self.cache_backend!r}"
            )
        if self.profile_cache_timeout_seconds <= 0 or self.master_cache_timeout_seconds <= 0:
            raise ValueError("Cache read timeouts must be positive")
        if self.master_fetch_retries < 1:
            raise ValueError("master_fetch_retries must be at least 1")
        if self.master_fetch_retry_base_delay < 0:
            raise ValueError("master_fetch_retry_base_delay must not be negative")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
