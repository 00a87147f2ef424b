"""
Quantity -> grams conversion for nutrition scaling.

Quantities are free text ("2", "1.5", "about 3"). Everything except digits
and dots is stripped and the leading float is parsed; an empty, unparseable
or zero quantity counts as 100 g worth. Units map through GRAMS_PER_UNIT.
"""

import math
import re
from typing import Mapping, Optional

from .nutrition_tables import GRAMS_PER_UNIT, UNKNOWN_UNIT_GRAMS

DEFAULT_QUANTITY = 100.0

_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_quantity(quantity: Optional[str]) -> float:
    if not quantity:
        return DEFAULT_QUANTITY
    digits = re.sub(r"[^0-9.]", "", str(quantity))
    match = _LEADING_FLOAT.match(digits)
    if not match:
        return DEFAULT_QUANTITY
    value = float(match.group(0))
    return value or DEFAULT_QUANTITY


def grams_per_unit(unit: Optional[str], table: Mapping[str, float] = GRAMS_PER_UNIT) -> float:
    normalized = (unit or "g").lower().strip()
    return table.get(normalized, UNKNOWN_UNIT_GRAMS)


def convert_to_grams(
    quantity: Optional[str] = "100",
    unit: Optional[str] = "g",
    table: Mapping[str, float] = GRAMS_PER_UNIT,
) -> float:
    return parse_quantity(quantity) * grams_per_unit(unit, table)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a calculator, not like banker's rounding."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
