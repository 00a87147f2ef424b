"""
Ingredient classification into cooking categories.

Matching is a bidirectional substring test against keyword tables, so
"chicken breast" lands in proteins via "chicken" and "rice" lands in grains
even when the table only lists "rice". The first category in priority
order wins; anything unmatched goes to ``others``.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from ..schemas import CategorizedIngredients

# Priority order matters: "garlic powder" is a vegetable before it is a spice.
CATEGORY_ORDER: Tuple[str, ...] = ("proteins", "vegetables", "grains", "dairy", "spices")

CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "proteins": (
        "chicken", "beef", "pork", "fish", "egg", "tofu", "beans",
        "lentils", "turkey", "salmon", "tuna",
    ),
    "vegetables": (
        "tomato", "onion", "garlic", "carrot", "potato", "bell pepper",
        "spinach", "broccoli", "cucumber", "lettuce", "mushroom", "celery",
        "zucchini",
    ),
    "grains": ("rice", "pasta", "bread", "quinoa", "oats", "flour", "noodles", "barley"),
    "dairy": ("milk", "cheese", "butter", "cream", "yogurt"),
    "spices": (
        "salt", "pepper", "basil", "oregano", "thyme", "cumin", "paprika",
        "garlic powder", "onion powder",
    ),
})


class IngredientClassifier:
    def __init__(self, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self.keywords = keywords if keywords is not None else CATEGORY_KEYWORDS

    def category_of(self, name: str) -> str:
        """Return the bucket name for a single ingredient."""
        lower = name.lower().strip()
        if not lower:
            return "others"
        for category in CATEGORY_ORDER:
            for item in self.keywords.get(category, ()):
                if item in lower or lower in item:
                    return category
        return "others"

    def classify(self, ingredients: Iterable[str]) -> CategorizedIngredients:
        result = CategorizedIngredients()
        for name in ingredients:
            getattr(result, self.category_of(name)).append(name)
        return result


classifier = IngredientClassifier()
