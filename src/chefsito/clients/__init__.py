"""Upstream API clients."""

from chefsito.clients.instacart import InstacartClient
from chefsito.clients.spoonacular import SpoonacularClient
from chefsito.clients.vision import IngredientScanner, extract_json

__all__ = [
    "InstacartClient",
    "SpoonacularClient",
    "IngredientScanner",
    "extract_json",
]
