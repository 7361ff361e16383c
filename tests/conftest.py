"""
Shared fixtures for the recipe finder tests.

Provides raw TheMealDB meal payloads, an in-process fake connector and a gate that
lets tests control when orchestrator requests resolve.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from recipes.connectors.base import BaseRecipeConnector
from recipes.errors import NoResults, NotFound, ServiceUnavailable
from recipes.models import RecipeDetail, RecipeSummary


def make_meal(meal_id: str = "52772", name: str = "Teriyaki Chicken Casserole", **extra: Any) -> Dict[str, Any]:
    """Full meal object as returned by lookup.php / random.php."""
    meal = {
        "idMeal": meal_id,
        "strMeal": name,
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": "Preheat oven to 350F.\r\n\r\nCombine soy sauce and water.\r\nBake for 20 minutes.",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
        "strTags": "Meat,Casserole",
        "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
        "strSource": None,
    }
    ingredients = [
        ("soy sauce", "3/4 cup"),
        ("water", "1/2 cup"),
        ("brown sugar", "1/4 cup"),
        ("ground ginger", "1/2 teaspoon"),
    ]
    for slot in range(1, 21):
        ingredient, measure = ingredients[slot - 1] if slot <= len(ingredients) else ("", " ")
        meal[f"strIngredient{slot}"] = ingredient
        meal[f"strMeasure{slot}"] = measure
    meal.update(extra)
    return meal


def make_filter_meal(meal_id: str, name: str) -> Dict[str, Any]:
    """Partial meal object as returned by filter.php."""
    return {
        "idMeal": meal_id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
    }


def make_summary(meal_id: str, name: Optional[str] = None) -> RecipeSummary:
    return RecipeSummary(id=meal_id, name=name or f"Recipe {meal_id}")


@pytest.fixture
def teriyaki_meal() -> Dict[str, Any]:
    return make_meal()


@pytest.fixture
def teriyaki_detail(teriyaki_meal) -> RecipeDetail:
    return RecipeDetail.from_meal(teriyaki_meal)


class FakeConnector(BaseRecipeConnector):
    """
    In-process connector for orchestrator tests.

    searches maps (operation, term) to a list of summaries or an exception instance.
    Unknown searches raise NoResults. Every call is recorded in calls.
    """
    source = "fake"

    def __init__(self) -> None:
        self.searches: Dict[Tuple[str, str], Any] = {}
        self.details: Dict[str, Any] = {}
        self.random_results: List[Any] = []
        self.calls: List[Tuple[str, Optional[str]]] = []

    def _search(self, operation: str, term: str) -> List[RecipeSummary]:
        self.calls.append((operation, term))
        outcome = self.searches.get((operation, term))
        if outcome is None:
            raise NoResults(f"no recipes found for {term!r}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def search_by_ingredient(self, term: str) -> List[RecipeSummary]:
        return self._search("ingredient", term)

    def search_by_name(self, term: str) -> List[RecipeSummary]:
        return self._search("name", term)

    def search_by_category(self, term: str) -> List[RecipeSummary]:
        return self._search("category", term)

    def fetch_random(self) -> RecipeDetail:
        self.calls.append(("random", None))
        if not self.random_results:
            raise ServiceUnavailable("the service returned no random recipe")
        outcome = self.random_results.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def fetch_by_id(self, recipe_id: str) -> RecipeDetail:
        self.calls.append(("lookup", recipe_id))
        outcome = self.details.get(recipe_id)
        if outcome is None:
            raise NotFound(f"no recipe with id {recipe_id}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


class DispatchGate:
    """
    Replacement for SearchOrchestrator._dispatch that holds each request until released.

    Requests are numbered in dispatch order. release(n) lets request n call the
    connector and resolve, so tests can choose any resolution order.
    """

    def __init__(self) -> None:
        self.waiters: List[asyncio.Future] = []

    async def __call__(self, func, *args):
        waiter = asyncio.get_running_loop().create_future()
        self.waiters.append(waiter)
        await waiter
        return func(*args)

    def release(self, index: int) -> None:
        self.waiters[index].set_result(None)


async def settle() -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)
