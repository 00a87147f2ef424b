import math
from typing import Callable, NamedTuple, Tuple


class QuantityEstimate(NamedTuple):
    quantity: str
    unit: str


def _fixed(qty: str) -> Callable[[int], str]:
    return lambda servings: qty


def _per(n: int) -> Callable[[int], str]:
    return lambda servings: str(math.ceil(servings / n))


# (keywords, quantity rule, unit). First match wins.
QUANTITY_RULES: Tuple[Tuple[Tuple[str, ...], Callable[[int], str], str], ...] = (
    (("salt", "pepper"), _fixed("1"), "tsp"),
    (("garlic", "ginger"), _fixed("2"), "cloves"),
    (("onion", "tomato", "potato"), _per(2), "medium"),
    (("rice", "pasta"), _per(4), "cup"),
    (("oil", "butter"), _fixed("2"), "tbsp"),
)
DEFAULT_RULE = (_per(2), "piece")


class QuantityEstimator:
    def __init__(self, rules=QUANTITY_RULES, default=DEFAULT_RULE):
        self.rules = rules
        self.default = default

    def estimate(self, ingredient: str, servings: int) -> QuantityEstimate:
        if servings < 1:
            raise ValueError(f"servings must be >= 1, got {servings}")

        lower = ingredient.lower()
        for keywords, rule, unit in self.rules:
            if any(k in lower for k in keywords):
                return QuantityEstimate(rule(servings), unit)

        rule, unit = self.default
        return QuantityEstimate(rule(servings), unit)


quantity_estimator = QuantityEstimator()
