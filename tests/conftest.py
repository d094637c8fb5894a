"""
Pytest configuration and fixtures for Chefsito tests.
"""

import os

import pytest

# Set test environment before importing chefsito modules
os.environ["CHEFSITO_ENV"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"

from chefsito.models.recipe import Recipe, RecipeIngredient  # noqa: E402


@pytest.fixture
def sample_recipe():
    """Sample recipe for testing."""
    return Recipe(
        id="716429",
        name="Pasta with Garlic and Cauliflower",
        description="A quick weeknight pasta.",
        cuisine_type="italian",
        prep_time_minutes=10,
        cook_time_minutes=35,
        difficulty="intermediate",
        servings=2,
        ingredients=[
            RecipeIngredient(name="all-purpose flour", quantity=2, unit="cup", is_available=True),
            RecipeIngredient(name="butter", quantity=0.5, unit="cup", is_available=False),
            RecipeIngredient(name="garlic", quantity=3, unit="cloves", is_available=True),
            RecipeIngredient(name="salt", quantity=0, unit="", is_available=False),
        ],
        instructions=["Boil the pasta.", "Roast the cauliflower.", "Toss together."],
        match_percentage=50,
        missing_ingredients=["butter", "salt"],
        image_url="https://img.spoonacular.com/recipes/716429-556x370.jpg",
    )


@pytest.fixture
def bulk_info():
    """Recipe information payloads as returned by informationBulk."""
    return [
        {
            "id": 1,
            "title": "Garlic Bread",
            "readyInMinutes": 15,
            "servings": 4,
            "summary": "<b>Crispy</b> garlic bread &amp; butter.",
            "cuisines": ["Italian"],
            "vegetarian": True,
            "extendedIngredients": [
                {"name": "garlic", "amount": 2, "unit": "cloves"},
                {"name": "bread", "amount": 1, "unit": "loaf"},
                {"name": "butter", "amount": 2, "unit": "tbsp"},
            ],
            "analyzedInstructions": [{"steps": [{"step": "Toast the bread."}]}],
        },
        {
            "id": 2,
            "title": "Chicken Rice Bowl",
            "readyInMinutes": 30,
            "cookingMinutes": 20,
            "preparationMinutes": 10,
            "servings": 2,
            "vegetarian": False,
            "extendedIngredients": [
                {"name": "chicken breast", "amount": 1, "unit": "lb"},
                {"name": "rice", "amount": 1, "unit": "cup"},
                {"name": "soy sauce", "amount": 2, "unit": "tbsp"},
            ],
            "analyzedInstructions": [
                {"steps": [{"step": "Cook rice."}, {"step": "Sear chicken."}, {"step": "Serve."}]}
            ],
            "nutrition": {
                "nutrients": [
                    {"name": "Calories", "amount": 512.5},
                    {"name": "Protein", "amount": 40.2},
                    {"name": "Carbohydrates", "amount": 55.0},
                    {"name": "Fat", "amount": 12.49},
                ]
            },
        },
        {
            "id": 3,
            "title": "Fried Rice",
            "readyInMinutes": 25,
            "servings": 2,
            "vegetarian": True,
            "extendedIngredients": [
                {"name": "rice", "amount": 2, "unit": "cups"},
                {"name": "egg", "amount": 2, "unit": ""},
            ],
            "instructions": "<ol><li>Scramble the egg. Add the rice.</li></ol>",
        },
    ]


@pytest.fixture
def find_by_ingredients_results():
    """Search results as returned by findByIngredients."""
    return [
        {
            "id": 1,
            "title": "Garlic Bread",
            "usedIngredients": [{"name": "garlic"}],
            "missedIngredients": [{"name": "bread"}, {"name": "butter"}],
        },
        {
            "id": 2,
            "title": "Chicken Rice Bowl",
            "usedIngredients": [{"name": "chicken breast"}, {"name": "rice"}],
            "missedIngredients": [{"name": "soy sauce"}],
        },
        {
            "id": 3,
            "title": "Fried Rice",
            "usedIngredients": [{"name": "rice"}],
            "missedIngredients": [{"name": "egg"}],
        },
    ]
