"""
Chefsito - Difficulty Classification.

The recipe API does not rate difficulty, so we derive it from a
weighted score of total time, step count and ingredient count.
"""

from typing import Literal

Difficulty = Literal["beginner", "intermediate", "advanced"]

BEGINNER_MAX_SCORE = 40
INTERMEDIATE_MAX_SCORE = 75

# Older cached recipes use easy/medium/hard
_LEGACY_DIFFICULTY = {
    "easy": "beginner",
    "beginner": "beginner",
    "medium": "intermediate",
    "intermediate": "intermediate",
    "hard": "advanced",
    "advanced": "advanced",
}


def difficulty_score(minutes: int, steps: int, ingredients: int) -> int:
    """
    Weighted effort score for a recipe.

    Examples:
        difficulty_score(20, 4, 5) -> 42
        difficulty_score(60, 15, 12) -> 129
    """
    return minutes + 3 * steps + 2 * ingredients


def classify_difficulty(minutes: int, steps: int, ingredients: int) -> Difficulty:
    """
    Classify a recipe as beginner, intermediate or advanced.

    Args:
        minutes: Total ready-in time
        steps: Number of instruction steps
        ingredients: Number of ingredient lines

    Returns:
        "beginner" for score <= 40, "intermediate" for <= 75, else "advanced"
    """
    score = difficulty_score(minutes, steps, ingredients)
    if score <= BEGINNER_MAX_SCORE:
        return "beginner"
    if score <= INTERMEDIATE_MAX_SCORE:
        return "intermediate"
    return "advanced"


def normalize_difficulty(value: str | None) -> Difficulty:
    """Map any stored difficulty label to the current names (unknown -> intermediate)."""
    return _LEGACY_DIFFICULTY.get((value or "").lower().strip(), "intermediate")
