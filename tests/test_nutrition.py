import pytest

from recipegen.schemas import Ingredient, NutritionFacts
from recipegen.services.nutrition_service import NutritionResolver, nutrition_resolver


def test_tomato_200g():
    facts = nutrition_resolver.resolve_nutrition(Ingredient(name="tomato", quantity="200", unit="g"))
    assert facts == NutritionFacts(calories=36, protein=1.8, carbs=7.8, fat=0.4, fiber=2.4, sugar=5.2, sodium=10)


def test_recipe_nutrition_is_sum_of_ingredients():
    ings = [
        Ingredient(name="tomato", quantity="100", unit="g"),
        Ingredient(name="chicken breast", quantity="100", unit="g"),
    ]
    total = nutrition_resolver.calculate_recipe_nutrition(ings)
    assert total.calories == 183
    assert total.protein == pytest.approx(31.9)
    assert total.sodium == 79


def test_recipe_nutrition_per_serving():
    ings = [
        Ingredient(name="tomato", quantity="100", unit="g"),
        Ingredient(name="chicken breast", quantity="100", unit="g"),
    ]
    per_serving = nutrition_resolver.calculate_recipe_nutrition(ings, servings=2)
    assert per_serving.calories == 92  # 91.5 rounds up
    assert per_serving.sodium == 40  # 39.5 rounds up


def test_empty_recipe_is_zero():
    assert nutrition_resolver.calculate_recipe_nutrition([]) == NutritionFacts()


def test_invalid_servings():
    with pytest.raises(ValueError):
        nutrition_resolver.calculate_recipe_nutrition([], servings=0)


def test_missing_quantity_means_100g():
    facts = nutrition_resolver.resolve_nutrition(Ingredient(name="rice"))
    assert facts.calories == 130


def test_fuzzy_match():
    assert nutrition_resolver.find_best_match("cherry tomato") == "tomato"
    facts = nutrition_resolver.ingredient_nutrition_info("Cherry Tomato")
    assert facts.calories == 18


def test_category_estimate():
    # not in the table, matched by the vegetable keyword list
    category, _ = nutrition_resolver.estimate_by_category("kale")
    assert category == "vegetable"
    assert nutrition_resolver.ingredient_nutrition_info("kale").calories == 25


def test_plural_names_are_treated_as_vegetables():
    category, _ = nutrition_resolver.estimate_by_category("lychees")
    assert category == "vegetable"


def test_default_estimate():
    category, _ = nutrition_resolver.estimate_by_category("xyz")
    assert category == "default"
    assert nutrition_resolver.ingredient_nutrition_info("xyz").calories == 50


def test_external_lookup_used_before_category():
    calls = []

    def lookup(name):
        calls.append(name)
        return {"calories": 300, "protein": 10}

    resolver = NutritionResolver(external_lookup=lookup)
    facts = resolver.ingredient_nutrition_info("Dragon Fruit")
    assert facts.calories == 300
    assert facts.protein == 10
    assert facts.fat == 0

    # cached after the first hit
    resolver.ingredient_nutrition_info("dragon fruit")
    assert calls == ["dragon fruit"]


def test_external_lookup_miss_falls_back():
    resolver = NutritionResolver(external_lookup=lambda name: None)
    assert resolver.ingredient_nutrition_info("dragon fruit").calories == 50


def test_custom_nutrition_override():
    resolver = NutritionResolver()
    resolver.add_custom_nutrition("Tomato", NutritionFacts(calories=20))
    assert resolver.ingredient_nutrition_info("tomato").calories == 20
    assert "tomato" in resolver.available_ingredients()
    # the module resolver is untouched
    assert nutrition_resolver.ingredient_nutrition_info("tomato").calories == 18


def test_daily_values():
    nutrition = NutritionFacts(calories=500, protein=28, carbs=60, fat=20, fiber=5, sodium=460)
    dv = nutrition_resolver.calculate_daily_values(nutrition, age=30, gender="male")
    assert dv["calories"] == 20
    assert dv["protein"] == 50
    assert dv["fiber"] == 20
    assert dv["sodium"] == 20


def test_daily_values_adjusted_for_age():
    nutrition = NutritionFacts(calories=450, fiber=6)
    dv = nutrition_resolver.calculate_daily_values(nutrition, age=60, gender="male")
    assert dv["calories"] == 20  # 2250 target
    assert dv["fiber"] == 20  # 30 target
