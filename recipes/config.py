"""
Configuration management for the recipe finder.

This module centralizes environment variable loading from the .env file at project root.
It should be imported early by the Streamlit entry point so that .env is loaded before
any other code reads environment variables.

When .env does not exist, load_dotenv() is a no-op and plain environment variables are used.

Environment Variables:
- MEALDB_BASE_URL: Optional, defaults to "https://www.themealdb.com/api/json/v1"
- MEALDB_API_KEY: Optional, defaults to the public test key "1"
- MEALDB_TIMEOUT_SECONDS: Optional, request timeout in seconds (default: 10)
- FAVORITES_PATH: Optional, JSON file holding saved favorites (default: data/recipe_favorites.json)
- FAVORITES_DATABASE_URL: Optional, SQLAlchemy URL; when set favorites are kept in a database
- LOG_LEVEL: Optional, defaults to "INFO"
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MEALDB_BASE_URL = "https://www.themealdb.com/api/json/v1"
DEFAULT_MEALDB_API_KEY = "1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_FAVORITES_PATH = Path("data") / "recipe_favorites.json"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    The project root is found by going up from this file's location
    (recipes/config.py -> recipes/ -> project root).

    Safe to call multiple times. Existing environment variables take precedence
    over values in .env (override=False).
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class MealDBConfig:
    """Configuration for the TheMealDB connector."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the API base URL without the key segment.

        Returns:
            Base URL string with trailing slash removed
        """
        return os.getenv("MEALDB_BASE_URL", DEFAULT_MEALDB_BASE_URL).rstrip("/")

    @staticmethod
    def get_api_key() -> str:
        """
        Get the API key used as a path segment.

        Returns:
            API key string (default: "1", the public development key)
        """
        return os.getenv("MEALDB_API_KEY") or DEFAULT_MEALDB_API_KEY

    @staticmethod
    def get_timeout() -> float:
        """
        Get the per-request timeout in seconds.

        Returns:
            Positive timeout in seconds. Invalid or non-positive values fall back
            to the default.
        """
        raw = os.getenv("MEALDB_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Invalid MEALDB_TIMEOUT_SECONDS=%r, using %s", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        if timeout <= 0:
            logger.warning("Non-positive MEALDB_TIMEOUT_SECONDS=%r, using %s", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return timeout


class FavoritesConfig:
    """Configuration for favorites persistence."""

    @staticmethod
    def get_path() -> Path:
        """
        Get the JSON file used as the favorites slot.

        Returns:
            Path to the favorites file
        """
        raw = os.getenv("FAVORITES_PATH")
        return Path(raw) if raw else DEFAULT_FAVORITES_PATH

    @staticmethod
    def get_database_url() -> Optional[str]:
        """
        Get the SQLAlchemy URL for database-backed favorites.

        Returns:
            Database URL string or None if not set
        """
        return os.getenv("FAVORITES_DATABASE_URL") or None


def get_log_level() -> str:
    """Log level name from LOG_LEVEL (default: INFO)."""
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once for the application.

    Args:
        level: Log level name (optional, reads LOG_LEVEL if not provided)
    """
    level_name = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
