"""
Type-ahead ingredient suggestions.

Ranking (deduplicated, in this order):
  a. known names starting with the input
  b. known names containing the input
  c. near misses by edit distance (input of 3+ chars)
  d. contextual names when the input carries an intent word ("meat", "veg", ...)
  e. members of a category whose name matches the input ("vegetables", "spice")
"""

from datetime import datetime
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .classifier import CATEGORY_KEYWORDS
from .nutrition_tables import NUTRITION_PER_100G
from .recognition import INGREDIENT_MAPPING

DEFAULT_LIMIT = 8
SIMPLE_LIMIT = 10
MIN_INPUT = 2
FUZZY_MIN_INPUT = 3
FUZZY_MAX_DISTANCE = 2

# intent word -> category bucket
INTENT_WORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("meat", "protein"), "proteins"),
    (("veg",), "vegetables"),
    (("grain", "carb"), "grains"),
    (("dairy",), "dairy"),
    (("spice", "herb"), "spices"),
)

# category bucket -> names a user might type for it
CATEGORY_NAMES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "proteins": ("protein", "proteins"),
    "vegetables": ("vegetable", "vegetables"),
    "grains": ("grain", "grains"),
    "dairy": ("dairy", "dairies"),
    "spices": ("spice", "spices"),
})

SEASONAL: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "winter": ("potato", "carrot", "onion", "cabbage", "kale", "orange", "lemon"),
    "spring": ("spinach", "asparagus", "peas", "lettuce", "strawberries", "basil"),
    "summer": ("tomato", "zucchini", "bell pepper", "cucumber", "corn", "berries"),
    "autumn": ("pumpkin", "sweet potato", "mushroom", "apple", "cauliflower", "broccoli"),
})

TIME_OF_DAY: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "breakfast": ("egg", "oats", "milk", "yogurt", "banana", "bread", "berries"),
    "lunch": ("chicken", "lettuce", "tomato", "bread", "cheese", "cucumber"),
    "dinner": ("chicken", "beef", "salmon", "rice", "pasta", "broccoli", "potato"),
    "snack": ("apple", "almonds", "yogurt", "carrot", "cheese", "peanuts"),
})


def edit_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def default_vocabulary() -> List[str]:
    seen = []
    sources: Iterable[Iterable[str]] = (
        [k for cat in CATEGORY_KEYWORDS.values() for k in cat],
        NUTRITION_PER_100G.keys(),
        INGREDIENT_MAPPING.values(),
    )
    for source in sources:
        for name in source:
            if name not in seen:
                seen.append(name)
    return seen


class IngredientSuggestionEngine:
    def __init__(
        self,
        vocabulary: Optional[Sequence[str]] = None,
        categories: Mapping[str, Tuple[str, ...]] = CATEGORY_KEYWORDS,
        mapping: Mapping[str, str] = INGREDIENT_MAPPING,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.vocabulary = list(vocabulary) if vocabulary is not None else default_vocabulary()
        self.categories = categories
        self.mapping = mapping
        self.clock = clock

    def suggest(self, partial_input: str, limit: int = DEFAULT_LIMIT) -> List[str]:
        query = (partial_input or "").strip().lower()
        if len(query) < MIN_INPUT:
            return []

        out: List[str] = []

        def add(names: Iterable[str]) -> None:
            for n in names:
                if n not in out:
                    out.append(n)

        add(n for n in self.vocabulary if n.startswith(query))
        add(n for n in self.vocabulary if query in n)

        if len(query) >= FUZZY_MIN_INPUT:
            add(n for n in self.vocabulary if self._is_near(query, n))

        for words, category in INTENT_WORDS:
            if any(w in query for w in words):
                add(self.categories.get(category, ()))

        for category, names in CATEGORY_NAMES.items():
            if any(name.startswith(query) or query.startswith(name) for name in names):
                add(self.categories.get(category, ()))

        return out[:limit]

    @staticmethod
    def _is_near(query: str, name: str) -> bool:
        if edit_distance(query, name) <= FUZZY_MAX_DISTANCE:
            return True
        return len(name) > len(query) and edit_distance(query, name[:len(query)]) <= 1

    def simple_suggest(self, partial_input: str) -> List[str]:
        """Substring search over canonical recognition names."""
        query = (partial_input or "").lower()
        out: List[str] = []
        for name in self.mapping.values():
            if query in name.lower() and name not in out:
                out.append(name)
        return out[:SIMPLE_LIMIT]

    def seasonal(self, month: Optional[int] = None) -> List[str]:
        month = month or self.clock().month
        if month in (12, 1, 2):
            season = "winter"
        elif month in (3, 4, 5):
            season = "spring"
        elif month in (6, 7, 8):
            season = "summer"
        else:
            season = "autumn"
        return list(SEASONAL[season])

    def time_of_day(self, hour: Optional[int] = None) -> List[str]:
        hour = self.clock().hour if hour is None else hour
        if 5 <= hour < 11:
            meal = "breakfast"
        elif 11 <= hour < 16:
            meal = "lunch"
        elif 16 <= hour < 22:
            meal = "dinner"
        else:
            meal = "snack"
        return list(TIME_OF_DAY[meal])


suggestion_engine = IngredientSuggestionEngine()
