import pytest

from recipegen.services.unit_conversion import (
    convert_to_grams,
    grams_per_unit,
    parse_quantity,
    round_half_up,
)


@pytest.mark.parametrize("quantity,unit,grams", [
    ("2", "cups", 480),
    ("1", "tbsp", 15),
    ("3", "cloves", 9),
    ("1", "handful", 100),
    ("200", "g", 200),
    ("1.5", "kg", 1500),
    ("2", " CUP ", 480),
])
def test_convert_to_grams(quantity, unit, grams):
    assert convert_to_grams(quantity, unit) == pytest.approx(grams)


def test_defaults_are_100_grams():
    assert convert_to_grams() == 100
    assert convert_to_grams(None, None) == 100


@pytest.mark.parametrize("raw,value", [
    ("0", 100),
    ("", 100),
    ("a pinch", 100),
    ("about 3", 3),
    ("2.5 ", 2.5),
    ("1/2", 12),
])
def test_parse_quantity(raw, value):
    assert parse_quantity(raw) == value


def test_unknown_unit():
    assert grams_per_unit("bunch") == 100


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(1.25, 1) == 1.3
