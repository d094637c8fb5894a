"""
Chefsito - Cooking Mode Ingredient Questions.

Answers spoken questions like "how much flour?" against the recipe
being cooked. Answers are phrased for text-to-speech.
"""

from chefsito.models.recipe import Recipe, RecipeIngredient

# Generic name -> specific names it should match in a recipe
INGREDIENT_ALIASES = {
    "flour": ["all-purpose flour", "all purpose flour", "wheat flour", "bread flour"],
    "sugar": ["granulated sugar", "white sugar", "caster sugar"],
    "butter": ["unsalted butter", "salted butter"],
    "milk": ["whole milk", "skim milk", "2% milk"],
    "egg": ["eggs", "large egg", "large eggs"],
    "oil": ["vegetable oil", "olive oil", "canola oil", "cooking oil"],
    "salt": ["kosher salt", "sea salt", "table salt"],
    "pepper": ["black pepper", "ground pepper", "white pepper"],
    "garlic": ["garlic cloves", "minced garlic", "garlic powder"],
    "onion": ["onions", "yellow onion", "white onion", "red onion"],
    "chicken": ["chicken breast", "chicken thigh", "chicken pieces"],
    "beef": ["ground beef", "beef steak", "beef chunks"],
}

NOT_FOUND_ANSWER = "I couldn't find that ingredient in this recipe."


def format_spoken_quantity(quantity: float) -> str:
    """
    Format a quantity for speech.

    Examples:
        2.0 -> "2"
        2.5 -> "2 and a half"
        0.25 -> "a quarter"
        1.1 -> "1.1"
    """
    if quantity == round(quantity):
        return str(int(quantity))

    whole = int(quantity)
    fraction = quantity - whole

    if abs(fraction - 0.5) < 0.01:
        spoken = "and a half"
    elif abs(fraction - 0.25) < 0.01:
        spoken = "and a quarter"
    elif abs(fraction - 0.75) < 0.01:
        spoken = "and three quarters"
    elif abs(fraction - 0.33) < 0.05:
        spoken = "and a third"
    elif abs(fraction - 0.67) < 0.05:
        spoken = "and two thirds"
    else:
        return f"{quantity:.1f}"

    if whole > 0:
        return f"{whole} {spoken}"
    return spoken.replace("and ", "", 1)


class IngredientQueryService:
    """Answers ingredient questions for one recipe."""

    def __init__(self, recipe: Recipe):
        self.recipe = recipe

    def _named_ingredients(self) -> list[RecipeIngredient]:
        # A blank name would match every query
        return [i for i in self.recipe.ingredients if i.name.strip()]

    def answer_query(self, query: str) -> str | None:
        """
        Answer a spoken question about the recipe's ingredients.

        Returns None when the question isn't understood.
        """
        lower_query = query.lower().strip()

        if "how much" in lower_query or "how many" in lower_query:
            return self._answer_how_much(lower_query)

        if "what" in lower_query and ("ingredient" in lower_query or "need" in lower_query):
            return self._list_ingredients()

        for ingredient in self._named_ingredients():
            if ingredient.name.lower() in lower_query:
                return self.format_answer(ingredient)

        match = self._fuzzy_match(lower_query)
        if match is not None:
            return self.format_answer(match)
        return None

    def _answer_how_much(self, query: str) -> str:
        for ingredient in self._named_ingredients():
            name = ingredient.name.lower()
            for part in name.split(" "):
                if len(part) > 2 and part in query:
                    return self.format_answer(ingredient)
            if name in query:
                return self.format_answer(ingredient)

        match = self._fuzzy_match(query)
        if match is not None:
            return self.format_answer(match)
        return NOT_FOUND_ANSWER

    @staticmethod
    def format_answer(ingredient: RecipeIngredient) -> str:
        if ingredient.quantity > 0:
            quantity = format_spoken_quantity(ingredient.quantity)
            if ingredient.unit:
                return f"{quantity} {ingredient.unit} of {ingredient.name}"
            return f"{quantity} {ingredient.name}"
        return ingredient.formatted

    def _list_ingredients(self) -> str:
        ingredients = self.recipe.ingredients
        if not ingredients:
            return "This recipe doesn't have any ingredients listed."
        if len(ingredients) == 1:
            return f"You need {ingredients[0].formatted}"
        names = ", ".join(i.name for i in ingredients)
        return f"You need {len(ingredients)} ingredients: {names}"

    def _fuzzy_match(self, query: str) -> RecipeIngredient | None:
        for generic, specifics in INGREDIENT_ALIASES.items():
            if generic not in query:
                continue
            for alias in [generic, *specifics]:
                for ingredient in self._named_ingredients():
                    if alias in ingredient.name.lower():
                        return ingredient

        # Last resort: any longer word of an ingredient name
        for ingredient in self._named_ingredients():
            for word in ingredient.name.lower().split(" "):
                if len(word) > 3 and word in query:
                    return ingredient
        return None

    def suggestions(self) -> list[str]:
        """Sample questions to show the user."""
        if not self.recipe.ingredients:
            return []
        questions = [f"How much {i.name}?" for i in self.recipe.ingredients[:3]]
        questions.append("What ingredients do I need?")
        return questions
