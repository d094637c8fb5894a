"""
Chefsito - Recipe Suggestions.

Ties the pieces together:
1. Vision model scans photos -> ingredient list (identification only)
2. Recipe API finds verified recipes -> ranked against the ingredients
"""

import logging
from pathlib import Path

from chefsito.clients.spoonacular import SpoonacularClient
from chefsito.clients.vision import IngredientScanner
from chefsito.errors import ChefsitoError, ConfigurationError
from chefsito.models.preferences import UserPreferences
from chefsito.models.recipe import RecipeSuggestionResult

logger = logging.getLogger(__name__)


class RecipeSuggester:
    """Turns ingredients (or photos of them) into recipe suggestions."""

    def __init__(
        self,
        recipes: SpoonacularClient,
        scanner: IngredientScanner | None = None,
    ):
        self.recipes = recipes
        self.scanner = scanner

    async def suggest_recipes(
        self,
        available_ingredients: list[str],
        preferences: UserPreferences | None = None,
        number_of_recipes: int = 3,
    ) -> RecipeSuggestionResult:
        """
        Find verified recipes for the given ingredients.

        Upstream failures are returned in `error` instead of raised.
        A missing API key still raises ConfigurationError.
        """
        try:
            recipes = await self.recipes.find_by_ingredients(
                available_ingredients,
                preferences=preferences,
                number=number_of_recipes,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Recipe suggestion failed: {e}")
            return RecipeSuggestionResult(
                available_ingredients=available_ingredients,
                error=str(e),
            )

        logger.info(f"Found {len(recipes)} verified recipes")
        return RecipeSuggestionResult(recipes=recipes, available_ingredients=available_ingredients)

    async def analyze_and_suggest(
        self,
        images: list[Path | str | bytes],
        additional_items: list[str] | None = None,
        preferences: UserPreferences | None = None,
        number_of_recipes: int = 3,
    ) -> RecipeSuggestionResult:
        """
        Scan photos for ingredients, then suggest recipes.

        Scan failures propagate: without ingredients there is nothing to search.
        """
        if self.scanner is None:
            raise ChefsitoError("No ingredient scanner configured")

        scan = await self.scanner.analyze_ingredients(images, additional_items)
        logger.info(f"Total ingredients: {len(scan.all_ingredients)} ({', '.join(scan.all_ingredients)})")

        return await self.suggest_recipes(
            scan.all_ingredients,
            preferences=preferences,
            number_of_recipes=number_of_recipes,
        )
