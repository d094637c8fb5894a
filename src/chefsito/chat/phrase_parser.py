"""
Chefsito - Ingredient Phrase Parsing.

Turns chat or voice phrases like "hey cheffy, I've got chicken breast,
rice and um broccoli" into ingredient names.

Parsing is heuristic and English-specific, so it sits behind the
IngredientPhraseParser interface and can be swapped per locale.
"""

import re
from abc import ABC, abstractmethod

# Wake words and conversational filler, removed before splitting
FILLER_PHRASES = [
    r"hey (?:cheffy|jeffy|chef|siri|alexa|google)",
    r"hi (?:cheffy|jeffy|chef)",
    r"so i have basically",
    r"i have basically",
    r"i basically have",
    r"i've basically got",
    r"i've got",
    r"i have got",
    r"i got",
    r"i have",
    r"we have",
    r"we've got",
    r"there is",
    r"there's",
    r"basically",
    r"um+",
    r"uh+",
    r"like",
    r"you know",
    r"let me see",
    r"let's see",
    r"a lot of",
    r"lots of",
    r"a few",
    r"a little bit of",
    r"a little",
    r"a bit of",
    r"i think",
    r"i guess",
    r"kind of",
    r"sort of",
]

FILLER_WORDS = {
    "a", "an", "the", "some", "any", "few", "little", "bit",
    "i", "we", "you", "have", "has", "got", "get", "also",
    "basically", "actually", "really", "just", "only", "maybe",
    "probably", "think", "guess", "so", "then", "too",
    "oh", "ah", "um", "uh", "hmm", "well", "like",
    "yes", "no", "yeah", "yep", "nope", "ok", "okay", "sure",
    "right", "here", "there", "this", "that", "it", "its",
}

# Second word of common two-word ingredients ("chicken breast", "soy sauce")
MULTI_WORD_SUFFIXES = {
    "breast", "thigh", "wing", "leg", "oil", "cream", "sauce", "cheese",
    "pepper", "beans", "rice", "flour", "sugar", "powder", "juice",
    "leaves", "seed", "seeds", "butter", "milk", "stock", "broth",
    "paste", "vinegar",
}

# First word of common two-word ingredients ("olive oil", "ground beef")
MULTI_WORD_PREFIXES = {
    "chicken", "beef", "pork", "turkey", "ground", "fresh", "frozen",
    "olive", "vegetable", "coconut", "sesame", "canola", "sour", "heavy",
    "whipping", "cream", "soy", "hot", "tomato", "fish", "oyster",
    "bell", "black", "white", "red", "green", "yellow", "brown",
    "powdered", "granulated", "lemon", "lime", "orange", "apple",
    "bay", "basil", "dried", "peanut", "almond", "cashew", "balsamic", "wine",
}

_FILLER_RE = re.compile(r"\b(?:" + "|".join(FILLER_PHRASES) + r")\b", re.IGNORECASE)
_SPLIT_RE = re.compile(r"[,\n;]|\band\b|&")


def is_filler_word(word: str) -> bool:
    return word.lower() in FILLER_WORDS


class IngredientPhraseParser(ABC):
    """Strategy for extracting ingredient names from free text."""

    @abstractmethod
    def parse(self, text: str) -> list[str]:
        """Return lower-cased ingredient names found in text, in order."""


class SpeechIngredientParser(IngredientPhraseParser):
    """English parser tuned for dictated ingredient lists."""

    def strip_filler(self, text: str) -> str:
        """Lower-case, drop wake words and filler phrases, collapse spaces."""
        cleaned = _FILLER_RE.sub(" ", text.lower())
        return re.sub(r"\s+", " ", cleaned).strip()

    def smart_split(self, text: str) -> list[str]:
        """
        Split an unpunctuated run of words into ingredients.

        Examples:
            "chicken breast rice olive oil garlic"
                -> ["chicken breast", "rice", "olive oil", "garlic"]
        """
        words = [w for w in text.split(" ") if w]
        ingredients = []
        i = 0
        while i < len(words):
            word = words[i].lower()
            if i + 1 < len(words):
                next_word = words[i + 1].lower()
                if word in MULTI_WORD_PREFIXES and (
                    next_word in MULTI_WORD_SUFFIXES or next_word in MULTI_WORD_PREFIXES
                ):
                    ingredients.append(f"{word} {next_word}")
                    i += 2
                    continue
                if next_word in MULTI_WORD_SUFFIXES:
                    ingredients.append(f"{word} {next_word}")
                    i += 2
                    continue
            if not is_filler_word(word) and len(word) > 1:
                ingredients.append(word)
            i += 1
        return ingredients

    def parse(self, text: str) -> list[str]:
        cleaned = self.strip_filler(text)
        parts = [p.strip().lower() for p in _SPLIT_RE.split(cleaned)]
        parts = [p for p in parts if p]

        if len(parts) == 1 and len(parts[0].split(" ")) > 3:
            parts = self.smart_split(parts[0])

        return [p for p in parts if len(p) > 1 and not is_filler_word(p)]


def merge_ingredients(existing: list[str], new: list[str]) -> list[str]:
    """Append ingredients not already present, keeping order."""
    merged = list(existing)
    for ingredient in new:
        if ingredient not in merged:
            merged.append(ingredient)
    return merged
