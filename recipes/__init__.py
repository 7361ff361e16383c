"""
Recipe finder core.

- models: recipe, search mode and session state models
- connectors: recipe service connectors (TheMealDB)
- orchestrator: search/detail state machine
- favorites: favorites set and reconciler
- storage / db: persistent favorites stores
"""

from recipes.models import CATEGORIES, RecipeDetail, RecipeSummary, SearchMode, SessionState
from recipes.favorites import FavoritesReconciler, FavoritesSet, toggle_favorite
from recipes.orchestrator import SearchOrchestrator
from recipes.storage import FavoritesStore, InMemoryFavoritesStore, JsonFileFavoritesStore, create_favorites_store

__all__ = [
    "CATEGORIES",
    "RecipeDetail",
    "RecipeSummary",
    "SearchMode",
    "SessionState",
    "FavoritesReconciler",
    "FavoritesSet",
    "toggle_favorite",
    "SearchOrchestrator",
    "FavoritesStore",
    "InMemoryFavoritesStore",
    "JsonFileFavoritesStore",
    "create_favorites_store",
]
