"""Chefsito data models."""

from chefsito.models.preferences import (
    CookingSkillLevel,
    DietaryRestriction,
    UserPreferences,
)
from chefsito.models.recipe import (
    IngredientScanResult,
    NutritionInfo,
    Recipe,
    RecipeIngredient,
    RecipeSuggestionResult,
)

__all__ = [
    "CookingSkillLevel",
    "DietaryRestriction",
    "UserPreferences",
    "IngredientScanResult",
    "NutritionInfo",
    "Recipe",
    "RecipeIngredient",
    "RecipeSuggestionResult",
]
