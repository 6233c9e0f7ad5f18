"""Centralized configuration management for the lens catalog."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`lens_catalog.settings`
# observes the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_CATALOG_API_URL = "https://lksrental.site/api.php?action=all"
DEFAULT_CATALOG_TIMEOUT_SECONDS = 30.0
DEFAULT_CAMERA_DATA_PATH = "./data/CAMERADATA.json"
DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/preferences.db"
SQLITE_ASYNC_PREFIX = "sqlite+aiosqlite://"
SQLITE_SYNC_PREFIX = "sqlite://"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_LOG_LEVEL = "INFO"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    The class encapsulates the environment variables consumed by the catalog
    providers and the preference store, and exposes derived helpers (for
    example, the normalized preferences database URL) so downstream modules do
    not repeat parsing logic.
    """

    _explicit_catalog_api_url: bool = PrivateAttr(default=False)
    _explicit_preferences_database_url: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(
        self, **values: object
    ) -> None:  # noqa: D401 - short override explanation
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_catalog_api_url = "catalog_api_url" in normalized_keys
        self._explicit_preferences_database_url = (
            "preferences_database_url" in normalized_keys
            or "use_sqlite" in normalized_keys
        )
        api_env = os.getenv("CATALOG_API_URL")
        if api_env is not None and api_env.strip():
            self._explicit_catalog_api_url = True
        database_env = os.getenv("PREFERENCES_DATABASE_URL")
        if database_env is not None and database_env.strip():
            self._explicit_preferences_database_url = True

    catalog_api_url: str = Field(
        default=DEFAULT_CATALOG_API_URL,
        alias="CATALOG_API_URL",
        description=(
            "Endpoint returning the lens database envelope"
            " (``success`` flag plus lenses, rentals and inventory)."
        ),
    )
    catalog_timeout_seconds: float = Field(
        default=DEFAULT_CATALOG_TIMEOUT_SECONDS,
        alias="CATALOG_TIMEOUT_SECONDS",
        description="Timeout applied to every catalog HTTP request.",
    )
    camera_data_path: str = Field(
        default=DEFAULT_CAMERA_DATA_PATH,
        alias="CAMERA_DATA_PATH",
        description=(
            "Local JSON file holding camera bodies and their recording formats."
        ),
    )
    preferences_database_url: str | None = Field(
        default=None,
        alias="PREFERENCES_DATABASE_URL",
        description=(
            "SQLAlchemy URL for the favorites/comparison store. Sync SQLite and"
            " PostgreSQL URLs are coerced into their async driver strings."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description=(
            "Force the local SQLite store regardless of PREFERENCES_DATABASE_URL."
        ),
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def resolved_preferences_database_url(self) -> str:
        """Return the async-compatible preferences URL after applying fallbacks."""

        if self.use_sqlite or not self.preferences_database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.preferences_database_url.strip()

        if url.startswith(SQLITE_ASYNC_PREFIX) or url.startswith(POSTGRES_ASYNC_PREFIX):
            return url

        if url.startswith(SQLITE_SYNC_PREFIX):
            return url.replace(SQLITE_SYNC_PREFIX, SQLITE_ASYNC_PREFIX, 1)

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        raise RuntimeError(
            f"Expected a SQLite or PostgreSQL connection string, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_preferences_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_catalog_api_url:
            warnings.append(
                "CATALOG_API_URL is not set - using the public lens database "
                f"endpoint ({DEFAULT_CATALOG_API_URL})"
            )

        if not self._explicit_preferences_database_url:
            warnings.append(
                "PREFERENCES_DATABASE_URL is not set - favorites and comparison "
                "sets will be stored in the local SQLite file"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


settings = get_settings()

__all__ = [
    "AppSettings",
    "DEFAULT_CAMERA_DATA_PATH",
    "DEFAULT_CATALOG_API_URL",
    "DEFAULT_CATALOG_TIMEOUT_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SQLITE_DATABASE_URL",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
    "settings",
]
