"""
Chefsito - Recipe Ranking.

Orders candidate recipes by how well they use what the user already has,
with a strong bias toward recipes built around the user's protein.

Score per candidate:
    match_percentage
    + 50 if the recipe uses the primary protein
    + 10 per secondary key ingredient the recipe uses

Ties keep the upstream order (Python's sort is stable).
"""

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chefsito.models.preferences import CookingSkillLevel

if TYPE_CHECKING:
    from chefsito.models.recipe import Recipe

logger = logging.getLogger(__name__)

PRIMARY_PROTEIN_BONUS = 50
SECONDARY_INGREDIENT_BONUS = 10

# Checked in this order for each user ingredient
PROTEIN_KEYWORDS = [
    "chicken",
    "beef",
    "steak",
    "pork",
    "turkey",
    "lamb",
    "duck",
    "bacon",
    "sausage",
    "ham",
    "fish",
    "salmon",
    "tuna",
    "cod",
    "tilapia",
    "shrimp",
    "prawn",
    "crab",
    "scallop",
    "tofu",
    "tempeh",
    "egg",
]

SECONDARY_KEYWORDS = [
    "pasta",
    "spaghetti",
    "noodle",
    "rice",
    "quinoa",
    "potato",
    "bread",
    "tortilla",
    "broccoli",
    "spinach",
    "tomato",
    "mushroom",
    "zucchini",
    "cauliflower",
    "carrot",
    "bell pepper",
    "bean",
]


def _keyword_pattern(keyword: str) -> re.Pattern:
    # Whole word, optional plural: "eggs" matches egg, "eggplant" does not
    return re.compile(rf"\b{re.escape(keyword)}(?:e?s)?\b")


_PROTEIN_PATTERNS = [(kw, _keyword_pattern(kw)) for kw in PROTEIN_KEYWORDS]
_SECONDARY_PATTERNS = [_keyword_pattern(kw) for kw in SECONDARY_KEYWORDS]


@dataclass
class RankCandidate:
    """A recipe plus the user ingredients the search API says it uses."""

    recipe: "Recipe"
    used_ingredients: list[str] = field(default_factory=list)

    @property
    def used_names(self) -> set[str]:
        return {name.lower().strip() for name in self.used_ingredients if name and name.strip()}


@dataclass
class RankedRecipe:
    recipe: "Recipe"
    score: int


def find_primary_protein(ingredients: list[str]) -> str | None:
    """
    Find the single primary protein in the user's ingredient list.

    Walks ingredients in list order; the first one containing a protein
    keyword wins and the keyword is returned.

    Examples:
        find_primary_protein(["rice", "Chicken Breast", "tofu"]) -> "chicken"
        find_primary_protein(["rice", "broccoli"]) -> None
    """
    for ingredient in ingredients:
        name = ingredient.lower()
        for keyword, pattern in _PROTEIN_PATTERNS:
            if pattern.search(name):
                return keyword
    return None


def find_secondary_ingredients(ingredients: list[str]) -> list[str]:
    """Return every user ingredient (lower-cased) that is a staple carb or vegetable."""
    found = []
    for ingredient in ingredients:
        name = ingredient.lower().strip()
        if any(pattern.search(name) for pattern in _SECONDARY_PATTERNS):
            found.append(name)
    return found


def _uses(used_names: set[str], ingredient: str) -> bool:
    """Substring match in either direction."""
    return any(ingredient in used or used in ingredient for used in used_names)


def score_candidate(
    candidate: RankCandidate,
    primary_protein: str | None,
    secondary_ingredients: list[str],
) -> int:
    used_names = candidate.used_names
    score = candidate.recipe.match_percentage

    if primary_protein and _uses(used_names, primary_protein):
        score += PRIMARY_PROTEIN_BONUS

    score += SECONDARY_INGREDIENT_BONUS * sum(
        1 for ingredient in secondary_ingredients if _uses(used_names, ingredient)
    )
    return score


def score_recipes(candidates: list[RankCandidate], ingredients: list[str]) -> list[RankedRecipe]:
    """Score and sort candidates, best first. Ties keep input order."""
    primary_protein = find_primary_protein(ingredients)
    secondary = find_secondary_ingredients(ingredients)
    logger.debug(f"Ranking {len(candidates)} recipes (protein={primary_protein}, secondary={secondary})")

    ranked = [
        RankedRecipe(recipe=c.recipe, score=score_candidate(c, primary_protein, secondary))
        for c in candidates
    ]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked


def rank_recipes(
    candidates: list[RankCandidate],
    ingredients: list[str],
    limit: int,
) -> list["Recipe"]:
    """
    Rank candidate recipes against the user's ingredients.

    Args:
        candidates: Recipes with their upstream "used" ingredient names
        ingredients: The user's raw ingredient names
        limit: Number of recipes to return

    Returns:
        Up to `limit` recipes, highest score first
    """
    return [r.recipe for r in score_recipes(candidates, ingredients)[:limit]]


# =============================================================================
# Skill-level mix for browse listings
# =============================================================================

# (beginner, intermediate, advanced) counts per skill level
SKILL_MIX: dict[CookingSkillLevel, tuple[int, int, int]] = {
    CookingSkillLevel.BEGINNER: (3, 1, 1),
    CookingSkillLevel.INTERMEDIATE: (1, 3, 1),
    CookingSkillLevel.ADVANCED: (1, 1, 3),
}


def mix_by_skill_level(
    recipes: list["Recipe"],
    skill_level: CookingSkillLevel = CookingSkillLevel.BEGINNER,
    limit: int = 5,
) -> list["Recipe"]:
    """
    Pick a difficulty mix weighted toward the user's skill level.

    Output is ordered beginner -> intermediate -> advanced, topped up from
    the remaining recipes (input order) when a tier runs short, and never
    longer than `limit`.
    """
    if not recipes:
        return []

    counts = SKILL_MIX[skill_level]
    result: list["Recipe"] = []
    for tier, count in zip(("beginner", "intermediate", "advanced"), counts):
        result.extend([r for r in recipes if r.normalized_difficulty == tier][:count])

    if len(result) < limit:
        chosen = {id(r) for r in result}
        remaining = [r for r in recipes if id(r) not in chosen]
        result.extend(remaining[: limit - len(result)])

    return result[:limit]
