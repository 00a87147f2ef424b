import random
from datetime import datetime, timezone

from recipegen.schemas import Ingredient
from recipegen.services.recipe_utils import (
    calculate_recipe_difficulty,
    calculate_recipe_similarity,
    capitalize_words,
    check_allergens,
    extract_unique_ingredients,
    filter_recipes_by_diet,
    format_cooking_time,
    format_ingredient_quantity,
    generate_recipe_id,
    generate_slug,
    get_recommended_recipes,
    recipe_to_text,
    search_recipes,
    sort_recipes,
    validate_recipe,
)


def test_recipe_id_format():
    rid = generate_recipe_id(random.Random(1))
    prefix, millis, suffix = rid.split("_")
    assert prefix == "recipe"
    assert millis.isdigit()
    assert len(suffix) == 9


def test_format_cooking_time():
    assert format_cooking_time(45) == "45 min"
    assert format_cooking_time(60) == "1 hr"
    assert format_cooking_time(95) == "1 hr 35 min"


def test_format_ingredient_quantity():
    assert format_ingredient_quantity(Ingredient(name="salt")) == "salt"
    assert format_ingredient_quantity(Ingredient(name="eggs", quantity="2")) == "2 eggs"
    assert format_ingredient_quantity(Ingredient(name="rice", quantity="1", unit="cup")) == "1 cup rice"


def test_slug_and_capitalize():
    assert generate_slug("  Chicken & Rice -- Bowl! ") == "chicken-rice-bowl"
    assert capitalize_words("chicken with RICE") == "Chicken With Rice"


def test_validate_recipe():
    ok, errors = validate_recipe({
        "name": "Soup", "ingredients": [{"name": "water"}], "steps": ["Boil."],
        "cookingTime": 10, "servings": 2,
    })
    assert ok and errors == []

    ok, errors = validate_recipe({"name": " ", "ingredients": [{"name": ""}], "cookingTime": 0})
    assert not ok
    assert "Recipe name is required" in errors
    assert "At least one cooking step is required" in errors
    assert "Valid cooking time is required" in errors
    assert "Valid serving size is required" in errors
    assert "Ingredient 1 must have a name" in errors


def test_calculate_difficulty(make_recipe):
    assert calculate_recipe_difficulty(make_recipe()) == "Easy"
    hard = make_recipe(
        ingredients=[f"item {i}" for i in range(12)],
        steps=["Marinate overnight."] + ["Stir."] * 9,
        cooking_time=150,
    )
    assert calculate_recipe_difficulty(hard) == "Hard"


def test_unique_ingredients(make_recipe):
    recipes = [make_recipe(ingredients=("Chicken!", "rice")), make_recipe(ingredients=("chicken", "Onion"))]
    assert extract_unique_ingredients(recipes) == ["chicken", "onion", "rice"]


def test_diet_filter_and_allergens(make_recipe):
    meat = make_recipe("r1", ingredients=("chicken", "rice"))
    veg = make_recipe("r2", ingredients=("tofu", "rice"))
    assert filter_recipes_by_diet([meat, veg], ["Vegetarian"]) == [veg]
    assert filter_recipes_by_diet([meat, veg], []) == [meat, veg]
    assert check_allergens(meat, ["Chicken", "Nuts"]) == ["Chicken"]


def test_search_and_sort(make_recipe):
    a = make_recipe("a", name="Zesty Tofu", ingredients=("tofu",), cooking_time=50, rating=3,
                    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    b = make_recipe("b", name="apple crumble", ingredients=("apple",), cooking_time=20, rating=5,
                    created_at=datetime(2024, 6, 1, tzinfo=timezone.utc))

    assert search_recipes([a, b], "TOFU") == [a]
    assert search_recipes([a, b], "  ") == [a, b]
    assert [r.id for r in sort_recipes([a, b], "name")] == ["b", "a"]
    assert [r.id for r in sort_recipes([a, b], "cookingTime")] == ["b", "a"]
    assert [r.id for r in sort_recipes([a, b], "rating")] == ["b", "a"]
    assert [r.id for r in sort_recipes([a, b], "date")] == ["b", "a"]


def test_similarity_and_recommendations(make_recipe):
    target = make_recipe("t", ingredients=("chicken", "rice", "onion"))
    close = make_recipe("c", ingredients=("chicken", "rice"))
    far = make_recipe("f", ingredients=("apple",))

    assert calculate_recipe_similarity(target, close) == 2 / 3
    assert calculate_recipe_similarity(target, far) == 0
    assert [r.id for r in get_recommended_recipes(target, [far, target, close], limit=5)] == ["c", "f"]


def test_recipe_to_text(make_recipe):
    text = recipe_to_text(make_recipe(name="chicken rice bowl", cooking_time=75))
    lines = text.splitlines()
    assert lines[0] == "Chicken Rice Bowl"
    assert lines[1] == "=" * len("Chicken Rice Bowl")
    assert "Cooking Time: 1 hr 15 min" in lines
    assert "1. 1 cup chicken" in lines
    assert "Calories: 400" in lines
    assert "Tags: dinner" in lines


def test_validate_recipe_rejects_non_numeric_times():
    ok, errors = validate_recipe({
        "name": "Soup", "ingredients": [{"name": "water"}], "steps": ["Boil."],
        "cookingTime": "30", "servings": True,
    })
    assert not ok
    assert errors == ["Valid cooking time is required", "Valid serving size is required"]
