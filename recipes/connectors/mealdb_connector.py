"""
TheMealDB connector using the public JSON API.

This connector talks to TheMealDB v1 endpoints with requests and normalizes the
`{"meals": [...] | null}` envelope into RecipeSummary / RecipeDetail models.

The connector:
- Builds URLs as {MEALDB_BASE_URL}/{MEALDB_API_KEY}/<endpoint>.php
- Treats `meals: null`, a missing `meals` key and an empty list identically
- Raises NoResults / ServiceUnavailable / NotFound for empty answers depending on the operation
- Translates every requests failure into NetworkError and every parsing failure into MalformedResponse
- Never retries; each call is a single round trip

Configuration comes from recipes.config.MealDBConfig unless passed explicitly.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from recipes.config import MealDBConfig
from recipes.errors import (
    MalformedResponse,
    NetworkError,
    NoResults,
    NotFound,
    ServiceUnavailable,
)
from recipes.models import RecipeDetail, RecipeSummary

from .base import BaseRecipeConnector

logger = logging.getLogger(__name__)

USER_AGENT = "recipe-finder/0.1"


class MealDBConnector(BaseRecipeConnector):
    """
    Connector for TheMealDB.

    Filter endpoints (ingredient, category) only return idMeal, strMeal and
    strMealThumb, so their summaries have no category. Name search returns full
    meals, which are reduced to summaries here.
    """
    source = "themealdb"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the TheMealDB connector.

        Args:
            base_url: API base URL without key (optional, reads MEALDB_BASE_URL if not provided)
            api_key: API key path segment (optional, reads MEALDB_API_KEY or defaults to "1")
            timeout: Request timeout in seconds (optional, reads MEALDB_TIMEOUT_SECONDS)
            session: requests.Session to reuse (optional, a new one is created if not provided)
        """
        base_url = (base_url or MealDBConfig.get_base_url()).rstrip("/")
        api_key = api_key or MealDBConfig.get_api_key()
        self.api_root = f"{base_url}/{api_key}"
        self.timeout = timeout if timeout is not None else MealDBConfig.get_timeout()

        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def search_by_ingredient(self, term: str) -> List[RecipeSummary]:
        meals = self._get_meals("filter.php", {"i": term})
        return self._to_summaries(meals, f"ingredient {term!r}")

    def search_by_name(self, term: str) -> List[RecipeSummary]:
        meals = self._get_meals("search.php", {"s": term})
        return self._to_summaries(meals, f"name {term!r}")

    def search_by_category(self, term: str) -> List[RecipeSummary]:
        meals = self._get_meals("filter.php", {"c": term})
        return self._to_summaries(meals, f"category {term!r}")

    # ------------------------------------------------------------------
    # Single recipe lookups
    # ------------------------------------------------------------------

    def fetch_random(self) -> RecipeDetail:
        meals = self._get_meals("random.php")
        if not meals:
            raise ServiceUnavailable("the service returned no random recipe")
        return self._to_detail(meals[0])

    def fetch_by_id(self, recipe_id: str) -> RecipeDetail:
        recipe_id = (recipe_id or "").strip()
        if not recipe_id:
            raise NotFound("no recipe id given")

        meals = self._get_meals("lookup.php", {"i": recipe_id})
        if not meals:
            raise NotFound(f"no recipe with id {recipe_id}")
        return self._to_detail(meals[0])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_meals(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        """
        Perform one GET and unwrap the meals envelope.

        Args:
            endpoint: Endpoint file name (e.g., "filter.php")
            params: Query parameters

        Returns:
            List of raw meal dictionaries (empty when meals is null or missing)

        Raises:
            NetworkError: On timeout, connection failure, HTTP error or other request error
            MalformedResponse: If the body is not JSON or the envelope has the wrong shape
        """
        url = f"{self.api_root}/{endpoint}"
        logger.debug("GET %s params=%r", url, params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.warning("TheMealDB request timed out: %s", url)
            raise NetworkError(f"request timed out after {self.timeout:g}s") from e
        except requests.exceptions.ConnectionError as e:
            logger.warning("Could not connect to TheMealDB: %s", e)
            raise NetworkError("could not connect to the recipe service") from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "unknown"
            logger.warning("TheMealDB returned HTTP %s for %s", status_code, url)
            raise NetworkError(f"the recipe service returned HTTP {status_code}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("TheMealDB request failed: %s", e)
            raise NetworkError(str(e) or "request failed") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("TheMealDB returned a non-JSON body for %s", url)
            raise MalformedResponse("the recipe service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise MalformedResponse("unexpected response format: expected a JSON object")

        meals = data.get("meals")
        if meals is None:
            return []
        if not isinstance(meals, list) or not all(isinstance(meal, dict) for meal in meals):
            raise MalformedResponse("unexpected response format: 'meals' is not a list of objects")
        return meals

    def _to_summaries(self, meals: List[Dict[str, Any]], description: str) -> List[RecipeSummary]:
        if not meals:
            raise NoResults(f"no recipes found for {description}")
        try:
            return [RecipeSummary.from_meal(meal) for meal in meals]
        except ValidationError as e:
            logger.warning("Could not parse meals for %s: %s", description, e)
            raise MalformedResponse(f"unexpected recipe format: {e.error_count()} invalid field(s)") from e

    def _to_detail(self, meal: Dict[str, Any]) -> RecipeDetail:
        try:
            return RecipeDetail.from_meal(meal)
        except ValidationError as e:
            logger.warning("Could not parse meal %r: %s", meal.get("idMeal"), e)
            raise MalformedResponse(f"unexpected recipe format: {e.error_count()} invalid field(s)") from e
