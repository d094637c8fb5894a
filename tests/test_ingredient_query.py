"""Tests for cooking-mode ingredient questions."""

import pytest

from chefsito.cooking.ingredient_query import (
    NOT_FOUND_ANSWER,
    IngredientQueryService,
    format_spoken_quantity,
)
from chefsito.models.recipe import Recipe, RecipeIngredient


@pytest.fixture
def service(sample_recipe):
    return IngredientQueryService(sample_recipe)


class TestFormatSpokenQuantity:
    """Tests for reading quantities aloud."""

    def test_whole_numbers(self):
        """Whole numbers should be read without decimals."""
        assert format_spoken_quantity(2.0) == "2"
        assert format_spoken_quantity(12) == "12"

    def test_common_fractions(self):
        """Common fractions should be spoken as words."""
        assert format_spoken_quantity(2.5) == "2 and a half"
        assert format_spoken_quantity(0.25) == "a quarter"
        assert format_spoken_quantity(1.75) == "1 and three quarters"
        assert format_spoken_quantity(0.33) == "a third"
        assert format_spoken_quantity(0.67) == "two thirds"

    def test_other_decimals(self):
        """Other decimals should be read as numbers."""
        assert format_spoken_quantity(1.1) == "1.1"


class TestHowMuch:
    """Tests for quantity questions."""

    def test_matches_word_of_ingredient_name(self, service):
        """A single word of the ingredient name should match."""
        assert service.answer_query("How much flour?") == "2 cup of all-purpose flour"

    def test_fraction_is_spoken(self, service):
        """Fractional quantities should be spoken."""
        assert service.answer_query("how much butter do I need") == "a half cup of butter"

    def test_how_many(self, service):
        """How many questions should be answered like how much."""
        assert service.answer_query("how many cloves of garlic") == "3 cloves of garlic"

    def test_no_quantity_uses_name(self, service):
        """Ingredients without a quantity should answer with the name."""
        assert service.answer_query("how much salt") == "salt"

    def test_not_in_recipe(self, service):
        """Unknown ingredients should get the not found answer."""
        assert service.answer_query("how much sugar") == NOT_FOUND_ANSWER


class TestOtherQueries:
    """Tests for listing, bare names and aliases."""

    def test_list_ingredients(self, service):
        """Listing should count and name every ingredient."""
        assert service.answer_query("What ingredients do I need?") == (
            "You need 4 ingredients: all-purpose flour, butter, garlic, salt"
        )

    def test_single_ingredient_list(self):
        """A single ingredient should be listed with its quantity."""
        recipe = Recipe(ingredients=[RecipeIngredient(name="water", quantity=1, unit="cup")])
        assert IngredientQueryService(recipe).answer_query("what do I need") == "You need 1 cup water"

    def test_empty_recipe(self):
        """A recipe with no ingredients should say so and suggest nothing."""
        service = IngredientQueryService(Recipe())
        assert service.answer_query("what ingredients") == "This recipe doesn't have any ingredients listed."
        assert service.suggestions() == []

    def test_bare_ingredient_name(self, service):
        """A bare ingredient name should answer its quantity."""
        assert service.answer_query("garlic") == "3 cloves of garlic"

    def test_alias_match(self):
        """Common aliases should match longer ingredient names."""
        recipe = Recipe(
            ingredients=[RecipeIngredient(name="extra virgin olive oil", quantity=2, unit="tbsp")]
        )
        assert IngredientQueryService(recipe).answer_query("pass the oil please") == (
            "2 tbsp of extra virgin olive oil"
        )

    def test_unrelated_query(self, service):
        """Questions about something else should get no answer."""
        assert service.answer_query("tell me the weather") is None


class TestSuggestions:
    """Tests for suggested questions."""

    def test_first_three_plus_list(self, service):
        """Suggestions should cover the first three ingredients and the list question."""
        assert service.suggestions() == [
            "How much all-purpose flour?",
            "How much butter?",
            "How much garlic?",
            "What ingredients do I need?",
        ]


class TestBlankIngredientNames:
    """Ingredients without a name never answer a query."""

    @pytest.fixture
    def service(self):
        recipe = Recipe(
            ingredients=[
                RecipeIngredient(name="", quantity=1, unit="cup"),
                RecipeIngredient(name="   ", quantity=2, unit="tbsp"),
                RecipeIngredient(name="rice", quantity=2, unit="cup"),
            ]
        )
        return IngredientQueryService(recipe)

    def test_how_much_other_ingredient(self, service):
        """A question about a missing ingredient should still be not found."""
        assert service.answer_query("how much sugar") == NOT_FOUND_ANSWER

    def test_unrelated_query(self, service):
        """An unrelated question should still get no answer."""
        assert service.answer_query("tell me the weather") is None

    def test_named_ingredient_still_matches(self, service):
        """Named ingredients next to blank ones should still be found."""
        assert service.answer_query("how much rice") == "2 cup of rice"
