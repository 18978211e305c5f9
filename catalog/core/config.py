"""
Configuration helpers for the movie catalog.

Routers/services read settings through get_settings() instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    seed_demo_data: bool
    create_tables: bool
    force_https: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./movies.db").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        seed_demo_data=_bool(os.getenv("SEED_DEMO_DATA"), True),
        create_tables=_bool(os.getenv("CREATE_TABLES"), True),
        force_https=_bool(os.getenv("FORCE_HTTPS"), False),
    )
