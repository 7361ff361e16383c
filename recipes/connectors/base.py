"""
Base connector abstract class for recipe service integrations.

This module defines the abstract base class that every recipe connector must implement.
It keeps the orchestrator independent of the remote API: the orchestrator only calls
these methods and only sees RecipeSummary / RecipeDetail models or RecipeServiceError
subclasses.

All connectors must:
- Implement the source attribute (e.g., "themealdb")
- Provide the three search operations, returning normalized RecipeSummary lists
- Provide fetch_random and fetch_by_id, returning a RecipeDetail
- Translate transport and parsing failures into recipes.errors exceptions
"""

from abc import ABC, abstractmethod
from typing import List

from recipes.models import RecipeDetail, RecipeSummary, SearchMode


class BaseRecipeConnector(ABC):
    """
    Abstract base class for all recipe connectors.

    Every operation is a single round trip with no retries.

    Attributes:
        source: String identifier for the recipe service (e.g., "themealdb")
    """
    source: str

    @abstractmethod
    def search_by_ingredient(self, term: str) -> List[RecipeSummary]:
        """
        Search recipes using a main ingredient.

        Args:
            term: Ingredient name (e.g., "chicken")

        Returns:
            Non-empty list of RecipeSummary in service order.

        Raises:
            NoResults: If nothing matched
            NetworkError: On transport failure
            MalformedResponse: If the payload cannot be parsed
        """
        pass

    @abstractmethod
    def search_by_name(self, term: str) -> List[RecipeSummary]:
        """Search recipes by (partial) name. Same contract as search_by_ingredient."""
        pass

    @abstractmethod
    def search_by_category(self, term: str) -> List[RecipeSummary]:
        """Search recipes in a category. Same contract as search_by_ingredient."""
        pass

    @abstractmethod
    def fetch_random(self) -> RecipeDetail:
        """
        Fetch one random recipe.

        Raises:
            ServiceUnavailable: If the service returned no recipe
            NetworkError: On transport failure
            MalformedResponse: If the payload cannot be parsed
        """
        pass

    @abstractmethod
    def fetch_by_id(self, recipe_id: str) -> RecipeDetail:
        """
        Fetch the full recipe for an identifier.

        Raises:
            NotFound: If no recipe has this identifier
            NetworkError: On transport failure
            MalformedResponse: If the payload cannot be parsed
        """
        pass

    def search(self, mode: SearchMode, term: str) -> List[RecipeSummary]:
        """
        Dispatch a search to the operation matching the mode.

        Args:
            mode: Ingredient, Name or Category
            term: Query term passed to the operation unchanged

        Raises:
            ValueError: For SearchMode.RANDOM, which yields a detail (use fetch_random)
        """
        if mode is SearchMode.INGREDIENT:
            return self.search_by_ingredient(term)
        if mode is SearchMode.NAME:
            return self.search_by_name(term)
        if mode is SearchMode.CATEGORY:
            return self.search_by_category(term)
        raise ValueError(f"Search mode {mode.value!r} has no list search; use fetch_random()")
