"""
Chefsito - Recipe API Client.

Fetches verified recipes from Spoonacular (https://spoonacular.com/food-api/docs)
and converts them into Recipe models.

Flow for "what can I cook?":
1. findByIngredients -> candidate ids with used/missed ingredient names
2. informationBulk -> full details (ingredients, steps, nutrition)
3. Filter by dietary restrictions, rank against the user's ingredients
"""

import html
import logging
import re
from typing import Any

import httpx

from chefsito.cache.recipes import RecipeCache
from chefsito.clients.http import DEFAULT_TIMEOUT, check_response, parse_json
from chefsito.config import settings
from chefsito.models.preferences import DietaryRestriction, UserPreferences
from chefsito.models.recipe import NutritionInfo, Recipe, RecipeIngredient
from chefsito.ranking.difficulty import classify_difficulty
from chefsito.ranking.ranker import RankCandidate, rank_recipes

logger = logging.getLogger(__name__)

BASE_URL = "https://api.spoonacular.com"
SERVICE = "Spoonacular"

DESCRIPTION_MAX_CHARS = 200
DEFAULT_READY_MINUTES = 30
KETO_MAX_CARBS_GRAMS = 20

# Restrictions the API flags directly on each recipe
_DIET_FLAGS = {
    DietaryRestriction.VEGETARIAN: "vegetarian",
    DietaryRestriction.VEGAN: "vegan",
    DietaryRestriction.GLUTEN_FREE: "glutenFree",
    DietaryRestriction.DAIRY_FREE: "dairyFree",
}


def _round(value: float) -> int:
    """Round half away from zero (API amounts are never negative)."""
    return int(value + 0.5)


def clean_html(text: str, max_chars: int = DESCRIPTION_MAX_CHARS) -> str:
    """Strip tags, decode entities and truncate for use as a description."""
    cleaned = html.unescape(re.sub(r"<[^>]*>", "", text or ""))
    if len(cleaned) > max_chars:
        cleaned = cleaned[: max_chars - 3] + "..."
    return cleaned.strip()


def _nutrient_amount(nutrients: list[dict], name: str, default: float = 0) -> float:
    for nutrient in nutrients:
        if nutrient.get("name") == name:
            return nutrient.get("amount") or 0
    return default


def _parse_instructions(info: dict[str, Any]) -> list[str]:
    steps = [
        step.get("step") or ""
        for section in info.get("analyzedInstructions") or []
        for step in section.get("steps") or []
    ]
    if steps:
        return steps

    raw = info.get("instructions")
    if not raw:
        return []
    # Plain-text fallback is HTML; split it into sentences
    stripped = re.sub(r"<[^>]*>", "", str(raw))
    return [s for s in re.split(r"\.\s+", stripped) if s.strip()]


def _parse_nutrition(info: dict[str, Any]) -> NutritionInfo | None:
    nutrition = info.get("nutrition")
    if not nutrition:
        return None
    nutrients = nutrition.get("nutrients") or []
    return NutritionInfo(
        calories=_round(_nutrient_amount(nutrients, "Calories")),
        protein_grams=_round(_nutrient_amount(nutrients, "Protein")),
        carbs_grams=_round(_nutrient_amount(nutrients, "Carbohydrates")),
        fat_grams=_round(_nutrient_amount(nutrients, "Fat")),
        fiber_grams=_round(_nutrient_amount(nutrients, "Fiber")),
    )


def _is_available(name: str, available: list[str]) -> bool:
    return any(a in name or name in a for a in available)


def _minutes(value: Any) -> int | None:
    # The API reports unknown times as null or -1
    if value is None or value < 0:
        return None
    return int(value)


def parse_recipe(
    info: dict[str, Any],
    search_result: dict[str, Any] | None = None,
    available_ingredients: list[str] | None = None,
    preferences: UserPreferences | None = None,
) -> Recipe:
    """
    Convert a recipe information payload into a Recipe.

    Args:
        info: Recipe information (informationBulk / information / complexSearch item)
        search_result: Matching findByIngredients item, for used/missed ingredients
        available_ingredients: User's ingredients, for per-line availability
        preferences: Supplies the fallback serving count
    """
    search_result = search_result or {}
    used = search_result.get("usedIngredients") or []
    missed = search_result.get("missedIngredients") or []
    total_needed = len(used) + len(missed)
    match_percentage = _round(len(used) / total_needed * 100) if total_needed else 0

    available = [a.lower().strip() for a in available_ingredients or [] if a.strip()]
    ingredients = []
    for line in info.get("extendedIngredients") or []:
        name = line.get("name") or ""
        ingredients.append(
            RecipeIngredient(
                name=name,
                quantity=float(line.get("amount") or 0),
                unit=line.get("unit") or "",
                is_optional=False,
                is_available=_is_available(name.lower(), available),
            )
        )

    instructions = _parse_instructions(info)
    ready_in = info.get("readyInMinutes") or DEFAULT_READY_MINUTES
    cuisines = info.get("cuisines") or []

    cook_minutes = _minutes(info.get("cookingMinutes"))
    servings = info.get("servings") or (preferences.household_size if preferences else 2)

    return Recipe(
        id=str(info.get("id", "")),
        name=info.get("title") or "Unnamed Recipe",
        description=clean_html(info.get("summary") or ""),
        cuisine_type=str(cuisines[0]).lower() if cuisines else "other",
        prep_time_minutes=_minutes(info.get("preparationMinutes")) or 0,
        cook_time_minutes=cook_minutes if cook_minutes is not None else ready_in,
        difficulty=classify_difficulty(ready_in, len(instructions), len(ingredients)),
        servings=servings,
        ingredients=ingredients,
        instructions=instructions,
        match_percentage=match_percentage,
        missing_ingredients=[m["name"] for m in missed if m.get("name")],
        image_url=info.get("image"),
        nutrition=_parse_nutrition(info),
        source_url=info.get("sourceUrl"),
        source_name=info.get("sourceName") or info.get("creditsText"),
    )


def matches_dietary_restrictions(info: dict[str, Any], preferences: UserPreferences | None) -> bool:
    """Check the API's diet flags (and carbs for keto) against the user's restrictions."""
    if preferences is None or not preferences.has_restrictions:
        return True

    for restriction in preferences.dietary_restrictions:
        flag = _DIET_FLAGS.get(restriction)
        if flag is not None:
            if info.get(flag) is not True:
                return False
        elif restriction == DietaryRestriction.KETO and info.get("nutrition"):
            nutrients = info["nutrition"].get("nutrients") or []
            if _nutrient_amount(nutrients, "Carbohydrates", default=100) > KETO_MAX_CARBS_GRAMS:
                return False
        # Other restrictions can't be checked from API fields
    return True


class SpoonacularClient:
    """Async client for the recipe API."""

    def __init__(
        self,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        cache: RecipeCache | None = None,
    ):
        self._api_key = api_key
        self._http = http_client
        self._owns_http = http_client is None
        self.cache = cache

    @property
    def api_key(self) -> str:
        if self._api_key is None:
            self._api_key = settings.require_api_key("spoonacular")
        return self._api_key

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(base_url=BASE_URL, timeout=DEFAULT_TIMEOUT)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "SpoonacularClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        params = {"apiKey": self.api_key, **params}
        response = await self._client().get(path, params=params)
        check_response(response, SERVICE)
        return parse_json(response, SERVICE)

    # =========================================================================
    # Search by ingredients
    # =========================================================================

    async def find_candidates(
        self,
        ingredients: list[str],
        preferences: UserPreferences | None = None,
        number: int = 3,
    ) -> list[RankCandidate]:
        """
        Search by ingredients and load full details, unranked.

        Fetches 2x the requested number so dietary filtering still leaves enough.
        """
        logger.info(f"Searching recipes with ingredients: {', '.join(ingredients)}")
        search_results = await self._get(
            "/recipes/findByIngredients",
            {
                "ingredients": ",".join(ingredients),
                "number": number * 2,
                "ranking": 2,  # Maximize used ingredients
                "ignorePantry": "false",
            },
        )
        if not search_results:
            return []

        search_results = search_results[: number * 2]
        by_id = {r.get("id"): r for r in search_results}
        ids = ",".join(str(r["id"]) for r in search_results)

        details = await self._get(
            "/recipes/informationBulk",
            {"ids": ids, "includeNutrition": "true"},
        )

        candidates = []
        for info in details:
            if not matches_dietary_restrictions(info, preferences):
                continue
            search_result = by_id.get(info.get("id"), {})
            recipe = parse_recipe(info, search_result, ingredients, preferences)
            used_names = [u.get("name") or "" for u in search_result.get("usedIngredients") or []]
            candidates.append(RankCandidate(recipe=recipe, used_ingredients=used_names))

        logger.info(f"Loaded {len(candidates)} of {len(details)} recipes after diet filtering")
        return candidates

    async def find_by_ingredients(
        self,
        ingredients: list[str],
        preferences: UserPreferences | None = None,
        number: int = 3,
    ) -> list[Recipe]:
        """Return the top `number` recipes for the user's ingredients, ranked."""
        candidates = await self.find_candidates(ingredients, preferences, number)
        return rank_recipes(candidates, ingredients, number)

    # =========================================================================
    # Lookups and browse listings
    # =========================================================================

    async def get_recipe(self, recipe_id: str, preferences: UserPreferences | None = None) -> Recipe:
        info = await self._get(f"/recipes/{recipe_id}/information", {"includeNutrition": "true"})
        return parse_recipe(info, preferences=preferences)

    async def search_recipes(
        self,
        query: str,
        number: int = 10,
        preferences: UserPreferences | None = None,
    ) -> list[Recipe]:
        """
        Free-text recipe search.

        Asks for recipes with instructions first; if that finds nothing,
        retries once without the filter.
        """
        params: dict[str, Any] = {
            "query": query,
            "number": number,
            "addRecipeInformation": "true",
            "addRecipeNutrition": "true",
            "fillIngredients": "true",
            "instructionsRequired": "true",
        }
        data = await self._get("/recipes/complexSearch", params)
        results = data.get("results") or []

        if not results:
            logger.info(f"No results for {query!r} with instructions required, retrying without")
            params.pop("instructionsRequired")
            data = await self._get("/recipes/complexSearch", params)
            results = data.get("results") or []

        return [
            parse_recipe(item, preferences=preferences)
            for item in results
            if matches_dietary_restrictions(item, preferences)
        ]

    async def get_popular_recipes(
        self,
        count: int = 12,
        tags: str | None = None,
        force_refresh: bool = False,
    ) -> list[Recipe]:
        """Random popular recipes, served from the cache while fresh."""
        if self.cache is not None and not force_refresh:
            cached = self.cache.get_popular(tag=tags)
            if cached is not None:
                return cached

        params: dict[str, Any] = {"number": count, "includeNutrition": "true"}
        if tags:
            params["tags"] = tags
        data = await self._get("/recipes/random", params)
        recipes = [parse_recipe(info) for info in data.get("recipes") or []]

        if self.cache is not None:
            self.cache.put_popular(recipes, tag=tags)
        return recipes

    async def get_category_recipes(
        self,
        category: str,
        count: int = 10,
        force_refresh: bool = False,
    ) -> list[Recipe]:
        """Recipes for a meal type (breakfast, dessert, ...), served from the cache while fresh."""
        if self.cache is not None and not force_refresh:
            cached = self.cache.get_category(category)
            if cached is not None:
                return cached

        data = await self._get(
            "/recipes/complexSearch",
            {
                "type": category,
                "number": count,
                "addRecipeInformation": "true",
                "fillIngredients": "true",
                "sort": "popularity",
            },
        )
        recipes = [parse_recipe(item) for item in data.get("results") or []]

        if self.cache is not None:
            self.cache.put_category(category, recipes)
        return recipes
