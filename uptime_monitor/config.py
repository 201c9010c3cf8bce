"""Application configuration from environment variables."""
import os
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_CHECK_INTERVAL_SECONDS = 30
DEFAULT_PROBE_TIMEOUT_SECONDS = 10.0


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Access keys sent in the Authorization header
    read_key: Optional[str] = None
    admin_key: Optional[str] = None

    # Seconds between batch checks of every monitor
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS

    # Client-side timeout for a single probe
    probe_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS

    # Path for SQLite database storage (used if DATABASE_URL not set)
    data_path: str = "./data"

    # Database URL (optional - overrides SQLite if set)
    database_url: Optional[str] = None

    # HTTP listen port
    port: int = 8080

    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        env_file = ".env"
        case_sensitive = False

    @field_validator("check_interval_seconds", mode="before")
    @classmethod
    def _interval_or_default(cls, value):
        """Fall back to the default for blank, unparsable or non-positive values."""
        if value is None:
            return DEFAULT_CHECK_INTERVAL_SECONDS
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return DEFAULT_CHECK_INTERVAL_SECONDS
        return parsed if parsed > 0 else DEFAULT_CHECK_INTERVAL_SECONDS


settings = Settings()


def require_access_keys(config: Settings) -> tuple[str, str]:
    """Return the trimmed (read_key, admin_key) pair or fail startup."""
    read_key = (config.read_key or "").strip()
    admin_key = (config.admin_key or "").strip()
    if not read_key or not admin_key:
        raise ConfigurationError(
            "READ_KEY and ADMIN_KEY must be provided via environment variables"
        )
    return read_key, admin_key


def get_database_url() -> str:
    """Get the database URL.

    Priority:
    1. DATABASE_URL environment variable
    2. Default SQLite file in DATA_PATH
    """
    if settings.database_url:
        url = settings.database_url
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    db_path = os.path.join(settings.data_path, "monitors.db")
    return f"sqlite+aiosqlite:///{db_path}"
