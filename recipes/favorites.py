"""
Favorites reconciliation.

This module holds the user's favorited recipes and the rules for changing them:

- FavoritesSet: ordered, id-keyed collection of RecipeSummary (insertion order is display order)
- toggle_favorite(): pure function (set, recipe) -> new set
- FavoritesReconciler: owns the current set, seeded from a FavoritesStore, and writes
  every change through to that store

Persistence is best-effort. A failed write is logged and the in-memory set is kept
as is, so favorites stay correct for the rest of the session.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Union

from recipes.models import RecipeDetail, RecipeSummary

logger = logging.getLogger(__name__)

RecipeLike = Union[RecipeSummary, RecipeDetail]


class FavoritesSet:
    """
    Ordered set of recipe summaries keyed by recipe id.

    Treated as immutable: toggled() returns a new set and leaves this one untouched.
    Duplicate ids passed to the constructor keep the first occurrence.
    """

    def __init__(self, recipes: Iterable[RecipeSummary] = ()) -> None:
        self._items: Dict[str, RecipeSummary] = {}
        for recipe in recipes:
            if recipe.id not in self._items:
                self._items[recipe.id] = recipe.to_summary()

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._items

    def __iter__(self) -> Iterator[RecipeSummary]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FavoritesSet):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    def __repr__(self) -> str:
        return f"FavoritesSet({self.ids()!r})"

    def ids(self) -> List[str]:
        """Recipe ids in display order."""
        return list(self._items)

    def to_list(self) -> List[RecipeSummary]:
        """Recipes in display order."""
        return list(self._items.values())

    def toggled(self, recipe: RecipeLike) -> "FavoritesSet":
        """
        Return a new set with the recipe removed if present, else appended.

        Args:
            recipe: Summary or detail; details are stored as their summary

        Returns:
            New FavoritesSet; order of the other members is unchanged
        """
        if recipe.id in self._items:
            return FavoritesSet(r for r in self._items.values() if r.id != recipe.id)
        return FavoritesSet([*self._items.values(), recipe.to_summary()])


def toggle_favorite(favorites: FavoritesSet, recipe: RecipeLike) -> FavoritesSet:
    """Pure toggle: insert the recipe if its id is absent, remove it otherwise."""
    return favorites.toggled(recipe)


class FavoritesReconciler:
    """
    Owns the in-memory favorites and keeps the store in sync.

    The store is injected so sessions can use a file, a database or an in-memory
    fake. Every toggle is followed by store.save() before toggle_favorite returns.
    """

    def __init__(self, store) -> None:
        """
        Initialize the reconciler from the store's saved favorites.

        Args:
            store: FavoritesStore used for the initial load and every write-through
        """
        self.store = store
        self._favorites = store.load()
        logger.info("Loaded %d favorite recipe(s)", len(self._favorites))

    @property
    def favorites(self) -> FavoritesSet:
        """Current favorites set."""
        return self._favorites

    def is_favorite(self, recipe_id: str) -> bool:
        """True iff recipe_id is in the current set."""
        return recipe_id in self._favorites

    def toggle_favorite(self, recipe: RecipeLike) -> FavoritesSet:
        """
        Toggle the recipe's membership and write the new set through to the store.

        Args:
            recipe: Recipe to add or remove

        Returns:
            The new current FavoritesSet (also available as .favorites)
        """
        self._favorites = toggle_favorite(self._favorites, recipe)
        action = "Added" if recipe.id in self._favorites else "Removed"
        logger.info("%s favorite %s (%d total)", action, recipe.id, len(self._favorites))

        try:
            self.store.save(self._favorites)
        except Exception as e:
            # Stores are expected to swallow their own failures; this guards custom stores
            logger.warning("Failed to persist favorites, keeping in-memory set: %s", e)

        return self._favorites
