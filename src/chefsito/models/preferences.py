"""User cooking preferences used to filter and order recipes."""

from enum import Enum

from pydantic import BaseModel, Field


class DietaryRestriction(str, Enum):
    NONE = "none"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    PESCATARIAN = "pescatarian"
    GLUTEN_FREE = "gluten_free"
    DAIRY_FREE = "dairy_free"
    KETO = "keto"
    PALEO = "paleo"
    HALAL = "halal"
    KOSHER = "kosher"


class CookingSkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class UserPreferences(BaseModel):
    """Preferences that shape recipe suggestions."""

    dietary_restrictions: list[DietaryRestriction] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    skill_level: CookingSkillLevel = CookingSkillLevel.BEGINNER
    household_size: int = 2

    # Grocery handoff
    postal_code: str | None = None
    preferred_retailer_id: str | None = None
    preferred_retailer_name: str | None = None

    @property
    def has_restrictions(self) -> bool:
        # An explicit "none" means no filtering at all
        return bool(self.dietary_restrictions) and DietaryRestriction.NONE not in self.dietary_restrictions
