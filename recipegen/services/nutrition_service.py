"""
Nutrition Resolver.

Resolution order for one ingredient (first hit wins):
1. exact table lookup of the normalized name
2. fuzzy table match (substring = 0.8, word overlap ratio, accept > 0.6)
3. optional external lookup (USDA), cached per name
4. category estimate from keyword heuristics
5. flat default

Table rows are per 100 g; results are scaled to the ingredient's quantity.
"""

import logging
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..schemas import Ingredient, NutritionFacts
from .nutrition_tables import (
    CATEGORY_ESTIMATES,
    DEFAULT_ESTIMATE,
    GRAMS_PER_UNIT,
    NUTRIENT_FIELDS,
    NUTRITION_PER_100G,
    Row,
)
from .unit_conversion import convert_to_grams, round_half_up
from .usda import USDALookup

logger = logging.getLogger("recipegen.nutrition")

# calories and sodium are whole numbers, the rest keep one decimal
INTEGER_FIELDS = ("calories", "sodium")

FUZZY_SUBSTRING_SCORE = 0.8
FUZZY_ACCEPT_THRESHOLD = 0.6

ExternalLookup = Callable[[str], Optional[Mapping[str, float]]]

DAILY_VALUES = {
    "male": {"calories": 2500, "protein": 56, "carbs": 300, "fat": 78, "fiber": 25, "sodium": 2300},
    "female": {"calories": 2000, "protein": 46, "carbs": 300, "fat": 65, "fiber": 25, "sodium": 2300},
}


def _round_field(field: str, value: float) -> float:
    if field in INTEGER_FIELDS:
        return round_half_up(value)
    return round_half_up(value, 1)


def _row_to_dict(row: Row) -> Dict[str, float]:
    return dict(zip(NUTRIENT_FIELDS, row))


class NutritionResolver:
    def __init__(
        self,
        table: Mapping[str, Row] = NUTRITION_PER_100G,
        category_estimates: Sequence[Tuple[str, Tuple[str, ...], Row]] = CATEGORY_ESTIMATES,
        default_estimate: Row = DEFAULT_ESTIMATE,
        unit_table: Mapping[str, float] = GRAMS_PER_UNIT,
        external_lookup: Optional[ExternalLookup] = None,
    ):
        self._table = table
        self._custom: Dict[str, Row] = {}
        self._cache: Dict[str, Dict[str, float]] = {}
        self.category_estimates = category_estimates
        self.default_estimate = default_estimate
        self.unit_table = unit_table
        self.external_lookup = external_lookup

    # --- table access ---

    def _entries(self) -> Dict[str, Row]:
        merged = dict(self._table)
        merged.update(self._custom)
        return merged

    def available_ingredients(self) -> list[str]:
        return sorted(self._entries().keys())

    def add_custom_nutrition(self, name: str, facts: NutritionFacts) -> None:
        """Override or extend the table for this resolver only."""
        key = name.lower().strip()
        self._custom[key] = tuple(getattr(facts, f) for f in NUTRIENT_FIELDS)
        self._cache.pop(key, None)

    # --- lookup chain ---

    def find_best_match(self, name: str) -> Optional[str]:
        best_key = None
        best_score = 0.0
        input_words = name.split(" ")

        for key in self._entries():
            score = 0.0
            if key in name or name in key:
                score = FUZZY_SUBSTRING_SCORE

            key_words = key.split(" ")
            overlap = len([w for w in key_words if w in input_words])
            score = max(score, overlap / max(len(key_words), len(input_words)))

            if score > best_score and score > FUZZY_ACCEPT_THRESHOLD:
                best_score = score
                best_key = key

        return best_key

    def estimate_by_category(self, name: str) -> Tuple[str, Row]:
        lower = name.lower()
        for category, keywords, row in self.category_estimates:
            if any(k in lower for k in keywords):
                return category, row
            # plural nouns are treated as vegetables
            if category == "vegetable" and lower.endswith("s") and len(lower) > 4:
                return category, row
        return "default", self.default_estimate

    def per_100g(self, name: str) -> Dict[str, float]:
        normalized = name.lower().strip()

        if normalized in self._cache:
            return self._cache[normalized]

        entries = self._entries()
        row = entries.get(normalized)
        if row is not None:
            return _row_to_dict(row)

        match = self.find_best_match(normalized)
        if match is not None:
            logger.debug("Fuzzy nutrition match %r -> %r", normalized, match)
            return _row_to_dict(entries[match])

        if self.external_lookup is not None:
            external = self.external_lookup(normalized)
            if external:
                data = {f: float(external.get(f, 0) or 0) for f in NUTRIENT_FIELDS}
                self._cache[normalized] = data
                return data

        category, row = self.estimate_by_category(normalized)
        logger.debug("Estimated nutrition for %r from category %s", normalized, category)
        return _row_to_dict(row)

    # --- scaling ---

    def scale(self, per_100g: Mapping[str, float], grams: float) -> NutritionFacts:
        factor = grams / 100
        return NutritionFacts(**{
            f: _round_field(f, max(per_100g.get(f, 0), 0) * factor) for f in NUTRIENT_FIELDS
        })

    def resolve_nutrition(self, ingredient: Ingredient) -> NutritionFacts:
        grams = convert_to_grams(ingredient.quantity or "100", ingredient.unit or "g", self.unit_table)
        return self.scale(self.per_100g(ingredient.name), grams)

    def ingredient_nutrition_info(self, name: str) -> NutritionFacts:
        return self.resolve_nutrition(Ingredient(name=name, quantity="100", unit="g"))

    def calculate_recipe_nutrition(self, ingredients: Iterable[Ingredient], servings: int = 1) -> NutritionFacts:
        if servings < 1:
            raise ValueError(f"servings must be >= 1, got {servings}")

        totals = {f: 0.0 for f in NUTRIENT_FIELDS}
        for ingredient in ingredients:
            facts = self.resolve_nutrition(ingredient)
            for f in NUTRIENT_FIELDS:
                totals[f] += getattr(facts, f)

        if servings > 1:
            return NutritionFacts(**{f: _round_field(f, totals[f] / servings) for f in NUTRIENT_FIELDS})

        return NutritionFacts(**{f: _round_field(f, totals[f]) for f in NUTRIENT_FIELDS})

    # --- daily values ---

    def calculate_daily_values(self, nutrition: NutritionFacts, age: int = 30, gender: str = "male") -> Dict[str, int]:
        """Percent of daily value per nutrient, adjusted for age and gender."""
        targets = dict(DAILY_VALUES["female" if gender == "female" else "male"])
        if age > 50:
            targets["calories"] *= 0.9
            targets["fiber"] += 5
        elif age < 25:
            targets["calories"] *= 1.1

        return {
            f: int(round_half_up(getattr(nutrition, f) / target * 100))
            for f, target in targets.items()
        }


def build_default_resolver() -> NutritionResolver:
    lookup = USDALookup()
    return NutritionResolver(external_lookup=lookup if lookup.is_available() else None)


nutrition_resolver = build_default_resolver()
