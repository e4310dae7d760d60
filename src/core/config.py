"""
Configuration management with pydantic-settings.

Every environment variable is validated when the process starts.
A missing required variable fails immediately with a clear message
(fail-fast).
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────────────────
    database_url: str = Field(
        description="Async connection string (postgresql+asyncpg://...)",
    )
    database_url_sync: str = Field(
        default="",
        description="Sync connection string for Alembic (postgresql://...)",
    )

    # ── Redis / ARQ ───────────────────────────────────────────────────
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection string for ARQ workers.",
    )

    # ── Notifications ─────────────────────────────────────────────────
    slack_webhook_url: str = Field(
        default="",
        description="Slack incoming webhook URL for change alerts.",
    )

    # ── Checks ────────────────────────────────────────────────────────
    default_timeout_seconds: int = Field(
        default=10,
        gt=0,
        description="Element wait used for tenants without a settings row.",
    )
    network_idle_timeout_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Secondary network-idle probe after the element wait expires.",
    )
    evaluate_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for in-page evaluations (text, attribute, icon).",
    )
    check_interval_minutes: int = Field(default=5, ge=1, le=60)
    max_concurrent_checks: int = Field(default=4, ge=1)

    # ── Browser ───────────────────────────────────────────────────────
    browser_headless: bool = Field(default=True)
    browser_user_agent: str = Field(default=DEFAULT_USER_AGENT)

    # ── Logging ───────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")


# Singleton instance — import this everywhere
settings = Settings()  # type: ignore[call-arg]
