"""Configuration for the dashboard backend using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pmrs_dashboard import __version__

_PACKAGE_DIR = Path(__file__).resolve().parent

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseSettings):
    """Logging options shared by the dashboard and the echo server."""

    model_config = SettingsConfigDict(extra="ignore")

    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


class Settings(LoggingSettings):
    """All dashboard settings, loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=str(_PACKAGE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Upstream (the pmrs daemon serving /services and /system)
    # ------------------------------------------------------------------
    upstream_base_url: str = "http://localhost:8000"
    # None means the outbound fetch waits for as long as the upstream takes.
    upstream_timeout_seconds: float | None = None
    user_agent: str = f"pmrs-dashboard/{__version__}"

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    production: bool = False
    host: str = "0.0.0.0"
    port: int = 5173
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    def validate_runtime(self) -> None:
        """Check that the upstream settings are usable.

        Call this at application startup (not at import time) so that
        tests can override settings before validation runs.
        """
        scheme = urlparse(self.upstream_base_url).scheme
        if scheme not in ("http", "https"):
            raise ValueError(
                f"UPSTREAM_BASE_URL must be an http(s) URL, got {self.upstream_base_url!r}"
            )
        if self.upstream_timeout_seconds is not None and self.upstream_timeout_seconds <= 0:
            raise ValueError("UPSTREAM_TIMEOUT_SECONDS must be positive when set.")


class EchoSettings(LoggingSettings):
    """Settings for the standalone echo test server."""

    port: int


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings singleton."""
    return Settings()
