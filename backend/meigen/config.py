"""
Meigen Backend — Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Environment variables are parsed and range-checked once, at import,
       so a bad value fails at startup instead of in the middle of a request.
How:   Pydantic Settings reads from the environment (or a .env file) and
       exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.

Secrets:
    ADMIN_PASSWORD gates every mutating route through the session cookie.
    CRON_SECRET authenticates the external scheduler that regenerates the
    daily quotes. Both default to empty; an empty value disables the
    corresponding entry point (it answers INTERNAL_ERROR) rather than
    accepting anything.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults target local development against the embedded SQLite file.
    Production deployments point DATABASE_URL at PostgreSQL and set both
    secrets.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # sqlite+aiosqlite:///path  → embedded file backend
    # postgresql+asyncpg://...  → managed remote backend
    database_url: str = Field(
        default="sqlite+aiosqlite:///./local.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to the PostgreSQL backend
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Admin Session ─────────────────────────────────────────────────────
    admin_password: str = Field(default="", description="Shared admin password")
    session_cookie_name: str = Field(default="session_token")
    session_duration_days: int = Field(default=7, ge=1, le=90)

    # Only send the cookie over HTTPS; enable behind TLS
    cookie_secure: bool = Field(default=False)

    # ── Scheduler ─────────────────────────────────────────────────────────
    cron_secret: str = Field(default="", description="Bearer secret for the cron endpoint")

    # ── Daily Quotes & Search ─────────────────────────────────────────────
    daily_quote_count: int = Field(default=30, ge=1, le=500)
    search_result_limit: int = Field(default=30, ge=1, le=200)
    search_min_length: int = Field(default=2, ge=1, le=10)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Comma-separated CORS_ORIGINS as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only the two async drivers the store backends know about are accepted."""
        if not v.startswith(("sqlite+aiosqlite://", "postgresql+asyncpg://")):
            raise ValueError(
                "DATABASE_URL must use sqlite+aiosqlite:// or postgresql+asyncpg://"
            )
        return v

    # ── Login Throttling ──────────────────────────────────────────────────
    # Per-IP sliding window on POST /api/login
    login_rate_limit_attempts: int = Field(default=10, ge=1, le=1000)
    login_rate_limit_window: int = Field(default=900, ge=10, le=86400)  # seconds

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        Raise ValueError listing every missing secret.

        Called from the lifespan, which logs the problem and keeps serving.
        """
        errors = []
        if not self.admin_password:
            errors.append("ADMIN_PASSWORD is not set; admin login is disabled.")
        if not self.cron_secret:
            errors.append("CRON_SECRET is not set; scheduled regeneration is disabled.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
