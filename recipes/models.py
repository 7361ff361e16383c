"""
Recipe and session models for the recipe finder.

This module defines the canonical recipe schemas used throughout the core.
The connector maps raw TheMealDB meal objects into RecipeSummary or RecipeDetail;
the orchestrator and favorites logic only ever see these models.

# NOTE: Field aliases match TheMealDB wire names (idMeal, strMeal, strMealThumb, ...).
    Models accept both the wire names and the Python field names, and
    model_dump(by_alias=True) produces the wire shape. The favorites slot is stored
    in that wire shape.

Current field expectations:
- filter.php (ingredient/category) returns: idMeal, strMeal, strMealThumb
- search.php (name) returns full meals: the above plus strCategory, strArea, strInstructions, ...
- lookup.php and random.php return full meals
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Number of numbered strIngredientN / strMeasureN slots in a full meal
MAX_INGREDIENT_SLOTS = 20

# Category tags offered in Category mode, passed verbatim as the query term
CATEGORIES = [
    "Beef",
    "Chicken",
    "Dessert",
    "Lamb",
    "Pasta",
    "Pork",
    "Seafood",
    "Vegetarian",
    "Breakfast",
    "Side",
]


def _blank_to_none(value: Any) -> Any:
    """Strip strings and map blank strings to None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class SearchMode(str, Enum):
    """Active search strategy. Exactly one is active at a time."""
    INGREDIENT = "ingredient"
    NAME = "name"
    CATEGORY = "category"
    RANDOM = "random"

    @property
    def requires_query(self) -> bool:
        """Whether a search in this mode needs a non-empty query term."""
        return self is not SearchMode.RANDOM


class RecipeSummary(BaseModel):
    """
    Minimal recipe record returned by search, filter and random operations.

    Summaries produced by the ingredient and category filters never carry a
    category, so consumers must not assume it is present.
    """
    id: str = Field(..., alias="idMeal", description="Opaque unique recipe identifier (e.g. '52772')")
    name: str = Field(..., alias="strMeal", description="Display name")
    thumbnail: Optional[str] = Field(None, alias="strMealThumb", description="Thumbnail image URL")
    category: Optional[str] = Field(None, alias="strCategory", description="Category tag, if the endpoint provides one")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("recipe id must not be blank")
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("recipe name must not be blank")
        return value

    @field_validator("thumbnail", "category", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @classmethod
    def from_meal(cls, meal: Dict[str, Any]) -> "RecipeSummary":
        """Build a summary from a raw meal object (extra keys are ignored)."""
        return cls.model_validate(meal)

    def to_summary(self) -> "RecipeSummary":
        """Project onto the plain summary fields."""
        return RecipeSummary(
            id=self.id,
            name=self.name,
            thumbnail=self.thumbnail,
            category=self.category,
        )


class IngredientLine(BaseModel):
    """One numbered ingredient/measure slot. Either side may be absent."""
    ingredient: Optional[str] = None
    measure: Optional[str] = None

    @field_validator("ingredient", "measure", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def is_empty(self) -> bool:
        """A slot without an ingredient is not shown, even if it has a measure."""
        return self.ingredient is None

    @property
    def display(self) -> str:
        """Human readable line, e.g. '2 cups Flour'."""
        return f"{self.measure or ''} {self.ingredient or ''}".strip()


class RecipeDetail(RecipeSummary):
    """
    Full recipe record returned by lookup-by-id and random operations.

    The numbered ingredient slots are parsed once into a fixed-size list of
    IngredientLine; slot N of the wire format is ingredients[N - 1].
    """
    area: Optional[str] = Field(None, alias="strArea", description="Area/origin tag (e.g. 'Italian')")
    instructions: str = Field("", alias="strInstructions", description="Free-text preparation instructions")
    video_url: Optional[str] = Field(None, alias="strYoutube", description="External video link")
    source_url: Optional[str] = Field(None, alias="strSource", description="Original recipe source link")
    tags: List[str] = Field(default_factory=list, description="Tags parsed from the comma-separated strTags")
    ingredients: List[IngredientLine] = Field(
        default_factory=lambda: [IngredientLine() for _ in range(MAX_INGREDIENT_SLOTS)],
        description="Exactly MAX_INGREDIENT_SLOTS ingredient/measure slots, some possibly empty",
    )

    @field_validator("area", "video_url", "source_url", mode="before")
    @classmethod
    def _optional_detail_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("instructions", mode="before")
    @classmethod
    def _instructions_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("ingredients")
    @classmethod
    def _pad_slots(cls, value: List[IngredientLine]) -> List[IngredientLine]:
        if len(value) > MAX_INGREDIENT_SLOTS:
            raise ValueError(f"at most {MAX_INGREDIENT_SLOTS} ingredient slots are supported")
        return value + [IngredientLine() for _ in range(MAX_INGREDIENT_SLOTS - len(value))]

    @classmethod
    def from_meal(cls, meal: Dict[str, Any]) -> "RecipeDetail":
        """
        Build a detail record from a raw meal object.

        Args:
            meal: Meal dictionary as returned by lookup.php / random.php / search.php

        Returns:
            RecipeDetail with ingredient slots and tags resolved

        Raises:
            pydantic.ValidationError: If required fields (idMeal, strMeal) are missing
        """
        data = dict(meal)
        data["ingredients"] = [
            IngredientLine(
                ingredient=meal.get(f"strIngredient{slot}"),
                measure=meal.get(f"strMeasure{slot}"),
            )
            for slot in range(1, MAX_INGREDIENT_SLOTS + 1)
        ]
        raw_tags = meal.get("strTags") or ""
        data["tags"] = [tag.strip() for tag in str(raw_tags).split(",") if tag.strip()]
        return cls.model_validate(data)

    def ingredient_lines(self) -> List[str]:
        """Display strings for the non-empty slots, in slot order."""
        return [line.display for line in self.ingredients if not line.is_empty]

    def instruction_steps(self) -> List[str]:
        """Non-blank instruction lines."""
        return [step.strip() for step in self.instructions.splitlines() if step.strip()]

    @property
    def youtube_id(self) -> Optional[str]:
        """Video id if video_url is a YouTube watch or short link."""
        if not self.video_url:
            return None
        parsed = urlparse(self.video_url)
        host = (parsed.hostname or "").lower()
        if host.endswith("youtu.be"):
            video_id = parsed.path.lstrip("/")
            return video_id or None
        if host.endswith("youtube.com"):
            values = parse_qs(parsed.query).get("v")
            return values[0] if values else None
        return None

    @property
    def embed_url(self) -> Optional[str]:
        """Embeddable player URL for YouTube videos."""
        video_id = self.youtube_id
        return f"https://www.youtube.com/embed/{video_id}" if video_id else None


class SessionState(BaseModel):
    """
    Everything the rendering layer needs to draw the current screen.

    Created with defaults at process start and owned by SearchOrchestrator for the
    rest of the process. Nothing here is persisted.
    """
    mode: SearchMode = Field(default=SearchMode.INGREDIENT, description="Active search mode")
    query_text: str = Field(default="", description="Current text in the query box")
    results: List[RecipeSummary] = Field(default_factory=list, description="Results of the last resolved search")
    selected_detail: Optional[RecipeDetail] = Field(None, description="Recipe shown in the detail view")
    is_loading: bool = Field(default=False, description="True while any dispatched request is unresolved")
    error_message: Optional[str] = Field(None, description="User-facing error text")
    showing_favorites: bool = Field(default=False, description="Whether the favorites view is active")

    model_config = ConfigDict(validate_assignment=True)
