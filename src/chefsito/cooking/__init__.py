"""Cooking mode helpers."""

from chefsito.cooking.ingredient_query import IngredientQueryService, format_spoken_quantity

__all__ = ["IngredientQueryService", "format_spoken_quantity"]
