"""
Chefsito - Recipe Models.

Recipes come from the recipe API or from cached JSON. They are
immutable once built; use model_copy(update=...) to derive a new one.
"""

import time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chefsito.ranking.difficulty import normalize_difficulty

DIFFICULTY_LABELS = {
    "beginner": "Easy-Peasy",
    "intermediate": "Getting Fancy",
    "advanced": "Up for a Challenge",
}


def _timestamp_id() -> str:
    return str(int(time.time() * 1000))


class RecipeIngredient(BaseModel):
    """An ingredient line in a recipe."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    quantity: float = 0.0
    unit: str = ""
    is_optional: bool = False
    is_available: bool = True  # User already has it

    @property
    def formatted(self) -> str:
        """Display text like "2 cup flour"."""
        if self.quantity == 0:
            return self.name
        qty = str(int(self.quantity)) if self.quantity == int(self.quantity) else str(self.quantity)
        return " ".join(part for part in (qty, self.unit, self.name) if part)


class NutritionInfo(BaseModel):
    """Per-serving nutrition summary."""

    model_config = ConfigDict(frozen=True)

    calories: int = 0
    protein_grams: int = 0
    carbs_grams: int = 0
    fat_grams: int = 0
    fiber_grams: int = 0


class Recipe(BaseModel):
    """A verified recipe suggested for the user's ingredients."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_timestamp_id)
    name: str = "Unnamed Recipe"
    description: str = ""
    cuisine_type: str = "other"
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    difficulty: str = "intermediate"
    servings: int = 2
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    match_percentage: int = 0
    missing_ingredients: list[str] = Field(default_factory=list)
    image_url: str | None = None
    nutrition: NutritionInfo | None = None
    source_url: str | None = None
    source_name: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Upstream ids are integers
        return str(value) if isinstance(value, int) else value

    @property
    def normalized_difficulty(self) -> str:
        return normalize_difficulty(self.difficulty)

    @property
    def difficulty_label(self) -> str:
        return DIFFICULTY_LABELS[self.normalized_difficulty]

    @property
    def total_time_minutes(self) -> int:
        return self.prep_time_minutes + self.cook_time_minutes

    @property
    def total_time_formatted(self) -> str:
        total = self.total_time_minutes
        if total < 60:
            return f"{total} min"
        hours, mins = divmod(total, 60)
        return f"{hours}h {mins}m" if mins else f"{hours}h"


class IngredientScanResult(BaseModel):
    """Ingredients detected in kitchen photos."""

    detected_ingredients: list[str] = Field(default_factory=list)
    additional_items: list[str] = Field(default_factory=list)
    confidence: str | None = None
    notes: str | None = None
    raw_analysis: str | None = None

    @property
    def all_ingredients(self) -> list[str]:
        return [*self.detected_ingredients, *self.additional_items]


class RecipeSuggestionResult(BaseModel):
    """Outcome of a recipe suggestion request."""

    recipes: list[Recipe] = Field(default_factory=list)
    available_ingredients: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def has_recipes(self) -> bool:
        return bool(self.recipes)
