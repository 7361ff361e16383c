"""
Persistent favorites storage.

A FavoritesStore is a single named slot holding the serialized FavoritesSet:
- load(): read once at startup; a missing or unparsable slot is an empty set
- save(): written after every favorites change; failures are logged and ignored

Payload format (shared by all stores): a JSON array of wire-shaped meal objects,
e.g. [{"idMeal": "52772", "strMeal": "Teriyaki Chicken Casserole", ...}].

Implementations:
- JsonFileFavoritesStore: JSON file on disk (default)
- InMemoryFavoritesStore: process-local payload, for ephemeral sessions and tests
- SqlFavoritesStore (recipes.db): SQLAlchemy table, when FAVORITES_DATABASE_URL is set
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from recipes.config import FavoritesConfig
from recipes.favorites import FavoritesSet
from recipes.models import RecipeSummary

logger = logging.getLogger(__name__)


def encode_favorites(favorites: FavoritesSet) -> str:
    """Serialize favorites to the JSON payload."""
    return json.dumps(
        [recipe.model_dump(by_alias=True) for recipe in favorites],
        ensure_ascii=False,
    )


def decode_favorites(payload: str) -> FavoritesSet:
    """
    Parse a JSON payload into a FavoritesSet.

    Raises:
        ValueError: If the payload is not a JSON array of valid recipe objects
            (json.JSONDecodeError and pydantic.ValidationError are both ValueError)
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("favorites payload must be a JSON array")
    return FavoritesSet(RecipeSummary.model_validate(item) for item in data)


class FavoritesStore(ABC):
    """Single durable slot for the favorites set."""

    def load(self) -> FavoritesSet:
        """
        Return the last saved set, or an empty set if nothing valid was saved.

        Never raises: read errors and corrupt payloads are logged and treated as "no data".
        """
        try:
            payload = self._read()
        except Exception as e:
            logger.warning("Could not read saved favorites from %s: %s", self.describe(), e)
            return FavoritesSet()

        if payload is None:
            return FavoritesSet()

        try:
            return decode_favorites(payload)
        except ValueError as e:
            logger.warning("Ignoring corrupt favorites in %s: %s", self.describe(), e)
            return FavoritesSet()

    def save(self, favorites: FavoritesSet) -> None:
        """
        Write the set to the slot.

        Never raises: write errors are logged and otherwise ignored.
        """
        try:
            self._write(encode_favorites(favorites))
            logger.debug("Saved %d favorite(s) to %s", len(favorites), self.describe())
        except Exception as e:
            logger.warning("Could not save favorites to %s: %s", self.describe(), e)

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Raw payload, or None if the slot has never been written."""
        pass

    @abstractmethod
    def _write(self, payload: str) -> None:
        """Durably replace the slot contents with payload."""
        pass

    def describe(self) -> str:
        """Short description of the slot for log messages."""
        return type(self).__name__


class JsonFileFavoritesStore(FavoritesStore):
    """Favorites kept in one JSON file."""

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        """
        Args:
            path: JSON file path (optional, reads FAVORITES_PATH or defaults to data/recipe_favorites.json)
        """
        self.path = Path(path) if path is not None else FavoritesConfig.get_path()

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file and rename so the slot is never half-written
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def describe(self) -> str:
        return str(self.path)


class InMemoryFavoritesStore(FavoritesStore):
    """Favorites slot that lives only as long as the process."""

    def __init__(self, payload: Optional[str] = None) -> None:
        self.payload = payload

    def _read(self) -> Optional[str]:
        return self.payload

    def _write(self, payload: str) -> None:
        self.payload = payload

    def describe(self) -> str:
        return "memory"


def create_favorites_store() -> FavoritesStore:
    """
    Build the store selected by configuration.

    Returns:
        SqlFavoritesStore if FAVORITES_DATABASE_URL is set, otherwise
        JsonFileFavoritesStore at FAVORITES_PATH
    """
    database_url = FavoritesConfig.get_database_url()
    if database_url:
        # recipes.db imports this module
        from recipes.db import SqlFavoritesStore

        return SqlFavoritesStore(database_url)
    return JsonFileFavoritesStore()
