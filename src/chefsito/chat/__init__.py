"""Chat and voice ingredient input."""

from chefsito.chat.phrase_parser import (
    IngredientPhraseParser,
    SpeechIngredientParser,
    merge_ingredients,
)

__all__ = [
    "IngredientPhraseParser",
    "SpeechIngredientParser",
    "merge_ingredients",
]
