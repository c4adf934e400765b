"""linksync configuration.

Every setting is an environment variable; a .env file at the project root
is loaded first. Read settings through Config, never os.getenv directly.
"""

import os
import tomllib
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from linksync.core.errors import ConfigError

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"


def _get_version() -> str:
    """Version from pyproject.toml in a checkout, else from installed metadata."""
    pyproject_path = _PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                return tomllib.load(f).get("project", {}).get("version", "0.0.0")
        except (OSError, tomllib.TOMLDecodeError):
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("linksync")
    except (ImportError, PackageNotFoundError):
        pass

    return "0.0.0"


VERSION = _get_version()

load_dotenv(_ENV_FILE)


def _env_number(name: str, default: str, cast: type[int] | type[float]) -> int | float | None:
    """Numeric env value, or None if it does not parse (reported by Config.validate)."""
    try:
        return cast(os.getenv(name, default))
    except ValueError:
        return None


def _split_csv(value: str | None) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class Config:
    """Settings read once at import time.

    Call reload() after changing the environment (tests, .env edits).
    """

    # Feed (RapidAPI live streaming endpoint)
    FEED_KEYS: list[str] = _split_csv(os.getenv("RAPIDAPI_KEYS_LIST"))
    FEED_HOST: str = os.getenv("RAPIDAPI_HOST", "football-live-streaming-api.p.rapidapi.com")
    FEED_BASE_URL: str = os.getenv(
        "FEED_BASE_URL",
        "https://football-live-streaming-api.p.rapidapi.com",
    )
    FEED_PAGES: int | None = _env_number("FEED_PAGES", "2", int)
    FEED_TIMEZONE: str = os.getenv("FEED_TIMEZONE", "UTC")
    HTTP_TIMEOUT: float | None = _env_number("HTTP_TIMEOUT", "15", float)

    # Link ranking - provider buckets in descending priority
    LINK_PRIORITY: list[str] = _split_csv(os.getenv("LINK_PRIORITY", "FMP,SOCO,OK9"))

    # Catalog store (Firebase Realtime Database REST API)
    FIREBASE_DATABASE_URL: str = os.getenv("FIREBASE_DATABASE_URL", "")
    FIREBASE_AUTH_TOKEN: str | None = os.getenv("FIREBASE_AUTH_TOKEN") or None
    CATALOG_PATH: str = os.getenv("CATALOG_PATH", "matches")

    # Raw feed audit copy
    AUDIT_DB_PATH: str = os.getenv(
        "AUDIT_DB_PATH",
        str(_PROJECT_ROOT / "data" / "feed_audit.db"),
    )

    # Repeat mode
    SYNC_CRON: str = os.getenv("SYNC_CRON", "*/15 * * * *")

    @classmethod
    def reload(cls) -> None:
        """Re-read every setting from the environment and .env."""
        load_dotenv(_ENV_FILE, override=True)
        cls.FEED_KEYS = _split_csv(os.getenv("RAPIDAPI_KEYS_LIST"))
        cls.FEED_HOST = os.getenv("RAPIDAPI_HOST", cls.FEED_HOST)
        cls.FEED_BASE_URL = os.getenv("FEED_BASE_URL", cls.FEED_BASE_URL)
        cls.FEED_PAGES = _env_number("FEED_PAGES", "2", int)
        cls.FEED_TIMEZONE = os.getenv("FEED_TIMEZONE", "UTC")
        cls.HTTP_TIMEOUT = _env_number("HTTP_TIMEOUT", "15", float)
        cls.LINK_PRIORITY = _split_csv(os.getenv("LINK_PRIORITY", "FMP,SOCO,OK9"))
        cls.FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL", "")
        cls.FIREBASE_AUTH_TOKEN = os.getenv("FIREBASE_AUTH_TOKEN") or None
        cls.CATALOG_PATH = os.getenv("CATALOG_PATH", "matches")
        cls.AUDIT_DB_PATH = os.getenv("AUDIT_DB_PATH", cls.AUDIT_DB_PATH)
        cls.SYNC_CRON = os.getenv("SYNC_CRON", "*/15 * * * *")

    @classmethod
    def get_feed_timezone(cls) -> ZoneInfo:
        """Get the zone the feed's calendar date is computed in."""
        try:
            return ZoneInfo(cls.FEED_TIMEZONE)
        except (KeyError, ValueError) as e:
            raise ConfigError(f"Invalid FEED_TIMEZONE '{cls.FEED_TIMEZONE}'") from e

    @classmethod
    def validate(cls) -> None:
        """Check the settings a sync pass cannot run without.

        Raises:
            ConfigError: If a required setting is missing or malformed
        """
        if not cls.FEED_KEYS:
            raise ConfigError("RAPIDAPI_KEYS_LIST is empty - at least one feed key is required")
        if not cls.FIREBASE_DATABASE_URL:
            raise ConfigError("FIREBASE_DATABASE_URL is not set")
        if cls.FEED_PAGES is None:
            raise ConfigError(f"FEED_PAGES must be an integer, got '{os.getenv('FEED_PAGES')}'")
        if cls.FEED_PAGES < 1:
            raise ConfigError(f"FEED_PAGES must be >= 1, got {cls.FEED_PAGES}")
        if cls.HTTP_TIMEOUT is None or not cls.HTTP_TIMEOUT > 0:
            raise ConfigError(
                f"HTTP_TIMEOUT must be a positive number, got '{os.getenv('HTTP_TIMEOUT')}'"
            )
        if not cls.LINK_PRIORITY:
            raise ConfigError("LINK_PRIORITY must name at least one provider")
        cls.get_feed_timezone()


def get_feed_timezone() -> ZoneInfo:
    """Get the configured feed timezone."""
    return Config.get_feed_timezone()


def get_link_priority() -> list[str]:
    """Get provider tags in descending link priority."""
    return list(Config.LINK_PRIORITY)
