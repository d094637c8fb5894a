"""Recipe ranking and difficulty heuristics."""

from chefsito.ranking.difficulty import (
    classify_difficulty,
    difficulty_score,
    normalize_difficulty,
)
from chefsito.ranking.ranker import (
    RankCandidate,
    RankedRecipe,
    find_primary_protein,
    find_secondary_ingredients,
    mix_by_skill_level,
    rank_recipes,
    score_recipes,
)

__all__ = [
    "classify_difficulty",
    "difficulty_score",
    "normalize_difficulty",
    "RankCandidate",
    "RankedRecipe",
    "find_primary_protein",
    "find_secondary_ingredients",
    "mix_by_skill_level",
    "rank_recipes",
    "score_recipes",
]
