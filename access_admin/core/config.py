"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend choices (identity, cache invalidation) are
validated at load time; DATABASE_URL is checked lazily when the first
session is requested so the app can boot for health checks.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AUTH_BACKENDS = ("central", "jwt")
CACHE_INVALIDATION_BACKENDS = ("none", "redis", "http")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; cross-field rules are enforced in
    validate_backends.
    """

    # App
    app_name: str = "access-admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Identity: "central" delegates to the identity service, "jwt" verifies locally
    auth_backend: str = "central"
    central_auth_url: str = ""
    central_auth_timeout_seconds: float = 10.0
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    admin_role: str = "admin"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Redis
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Cache invalidation for the consumer-facing access cache
    cache_invalidation_backend: str = "none"
    cache_invalidation_url: str | None = None

    # Audit queries
    audit_default_limit: int = 100
    audit_max_limit: int = 1000

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
    def validate_backends(self) -> "Settings":
        """Validate identity and cache-invalidation backend settings.

        - auth_backend must be 'central' or 'jwt'; 'jwt' requires SECRET_KEY.
        - cache_invalidation_backend must be 'none', 'redis' or 'http';
          'http' requires CACHE_INVALIDATION_URL.
        """
        if self.auth_backend not in AUTH_BACKENDS:
            raise ValueError(
                f"auth_backend must be one of {AUTH_BACKENDS}, got: {self.auth_backend!r}"
            )
        if self.auth_backend == "jwt" and not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required when auth_backend is 'jwt'. "
                "Generate with: openssl rand -hex 32."
            )
        if self.cache_invalidation_backend not in CACHE_INVALIDATION_BACKENDS:
            raise ValueError(
                "cache_invalidation_backend must be one of "
                f"{CACHE_INVALIDATION_BACKENDS}, got: {self.cache_invalidation_backend!r}"
            )
        if self.cache_invalidation_backend == "http" and not self.cache_invalidation_url:
            raise ValueError(
                "CACHE_INVALIDATION_URL is required when cache_invalidation_backend is 'http'."
            )
        if self.audit_default_limit < 1 or self.audit_max_limit < self.audit_default_limit:
            raise ValueError(
                "audit_default_limit must be >= 1 and <= audit_max_limit"
            )
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
