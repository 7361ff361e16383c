"""
Database persistence layer for favorites.

This module provides an optional SQL-backed favorites slot that is used when the
FAVORITES_DATABASE_URL environment variable is set (see storage.create_favorites_store).
Any SQLAlchemy URL works, e.g. sqlite:///data/favorites.db or a Postgres URL.

Table layout:
- recipe_favorites: one row per favorite, ordered by position; payload holds the
  wire-shaped recipe JSON

Like the file store, every failure is logged and swallowed: load() returns an empty
set and save() leaves the in-memory favorites untouched.
"""

import json
import logging
from typing import Optional

from sqlalchemy import Column, Integer, String, Text, create_engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import declarative_base, sessionmaker

from recipes.storage import FavoritesStore

logger = logging.getLogger(__name__)

Base = declarative_base()


class FavoriteRow(Base):
    """Favorites table - one row per favorited recipe."""
    __tablename__ = "recipe_favorites"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    recipe_id = Column(String(64), unique=True, nullable=False)
    payload = Column(Text, nullable=False)  # JSON object in wire shape


class SqlFavoritesStore(FavoritesStore):
    """Favorites slot stored in a SQL table."""

    def __init__(self, database_url: str) -> None:
        """
        Remember the database URL. The engine is created on first use, so a bad
        URL or a missing driver surfaces inside load()/save() and is swallowed there.

        Args:
            database_url: SQLAlchemy database URL
        """
        self.database_url = database_url
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

    def init_db(self) -> None:
        """
        Create the engine and the favorites table (safe to call multiple times).

        Raises:
            sqlalchemy.exc.ArgumentError: If the URL cannot be parsed
            sqlalchemy.exc.NoSuchModuleError: If the dialect or driver is not installed
            Exception: If the database connection or table creation fails
        """
        if self._initialized:
            return
        if self.engine is None:
            self.engine = create_engine(self.database_url, pool_pre_ping=True, echo=False)
            self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        self._initialized = True
        logger.info("Favorites table initialized (or already exists)")

    def _read(self) -> Optional[str]:
        self.init_db()
        db = self.SessionLocal()
        try:
            rows = db.query(FavoriteRow).order_by(FavoriteRow.position).all()
            if not rows:
                return None
            # Same JSON array payload as the file store
            return "[" + ",".join(row.payload for row in rows) + "]"
        finally:
            db.close()

    def _write(self, payload: str) -> None:
        self.init_db()
        items = json.loads(payload)
        db = self.SessionLocal()
        try:
            db.query(FavoriteRow).delete()
            for position, item in enumerate(items):
                db.add(
                    FavoriteRow(
                        position=position,
                        recipe_id=str(item["idMeal"]),
                        payload=json.dumps(item, ensure_ascii=False),
                    )
                )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def describe(self) -> str:
        try:
            return make_url(self.database_url).render_as_string(hide_password=True)
        except ArgumentError:
            return "unparsable database URL"
