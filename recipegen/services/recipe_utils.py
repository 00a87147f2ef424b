import random
import re
import string
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..schemas import Ingredient, Recipe

_BASE36 = string.digits + string.ascii_lowercase

COMPLEX_TECHNIQUES = ("marinate", "ferment", "proof", "sous vide", "flambé", "julienne", "brunoise")

DIET_EXCLUSIONS = {
    "vegetarian": ("chicken", "beef", "pork", "fish", "meat"),
    "vegan": ("chicken", "beef", "pork", "fish", "meat", "milk", "cheese", "egg", "butter", "cream"),
    "gluten-free": ("wheat", "flour", "bread", "pasta", "barley", "rye"),
    "dairy-free": ("milk", "cheese", "butter", "cream", "yogurt"),
}

SORT_KEYS = ("name", "cookingTime", "rating", "date")


def generate_recipe_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"recipe_{int(time.time() * 1000)}_{suffix}"


def format_cooking_time(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, rem = divmod(minutes, 60)
    if rem == 0:
        return f"{hours} hr"
    return f"{hours} hr {rem} min"


def format_ingredient_quantity(ingredient: Ingredient) -> str:
    if not ingredient.quantity:
        return ingredient.name
    if not ingredient.unit:
        return f"{ingredient.quantity} {ingredient.name}"
    return f"{ingredient.quantity} {ingredient.unit} {ingredient.name}"


def generate_slug(text: str) -> str:
    s = text.lower().strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s_-]+", "-", s)
    return s.strip("-")


def capitalize_words(text: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split(" "))


def calculate_recipe_difficulty(recipe: Recipe) -> str:
    """Heuristic difficulty for user-edited recipes (counts, time, techniques)."""
    score = 0

    if len(recipe.ingredients) > 10:
        score += 2
    elif len(recipe.ingredients) > 5:
        score += 1

    if len(recipe.steps) > 8:
        score += 2
    elif len(recipe.steps) > 4:
        score += 1

    if recipe.cooking_time > 120:
        score += 2
    elif recipe.cooking_time > 60:
        score += 1

    if any(k in step.lower() for step in recipe.steps for k in COMPLEX_TECHNIQUES):
        score += 2

    if score >= 4:
        return "Hard"
    if score >= 2:
        return "Medium"
    return "Easy"


def _positive_number(value) -> bool:
    # bool is an int subclass; "30" is not a number
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_recipe(data: dict) -> tuple[bool, List[str]]:
    """Validate a complete recipe dict (camelCase keys). Returns (is_valid, errors)."""
    errors = []

    if not str(data.get("name") or "").strip():
        errors.append("Recipe name is required")

    ingredients = data.get("ingredients") or []
    if not ingredients:
        errors.append("At least one ingredient is required")

    if not data.get("steps"):
        errors.append("At least one cooking step is required")

    if not _positive_number(data.get("cookingTime")):
        errors.append("Valid cooking time is required")

    if not _positive_number(data.get("servings")):
        errors.append("Valid serving size is required")

    for i, ing in enumerate(ingredients, start=1):
        name = ing.get("name") if isinstance(ing, dict) else getattr(ing, "name", None)
        if not str(name or "").strip():
            errors.append(f"Ingredient {i} must have a name")

    return not errors, errors


def normalize_ingredient_name(name: str) -> str:
    s = re.sub(r"[^a-z0-9\s]", "", name.lower().strip())
    return re.sub(r"\s+", " ", s).strip()


def extract_unique_ingredients(recipes: Iterable[Recipe]) -> List[str]:
    return sorted({normalize_ingredient_name(i.name) for r in recipes for i in r.ingredients})


def filter_recipes_by_diet(recipes: List[Recipe], restrictions: List[str]) -> List[Recipe]:
    if not restrictions:
        return recipes

    def allowed(recipe: Recipe, restriction: str) -> bool:
        banned = DIET_EXCLUSIONS.get(restriction.lower())
        if not banned:
            return True
        return not any(b in i.name.lower() for i in recipe.ingredients for b in banned)

    return [r for r in recipes if all(allowed(r, x) for x in restrictions)]


def search_recipes(recipes: List[Recipe], query: Optional[str]) -> List[Recipe]:
    if not query or not query.strip():
        return recipes
    q = query.lower().strip()

    def hit(r: Recipe) -> bool:
        return (
            q in r.name.lower()
            or q in (r.description or "").lower()
            or any(q in i.name.lower() for i in r.ingredients)
            or any(q in t.lower() for t in r.tags)
            or q in (r.cuisine or "").lower()
        )

    return [r for r in recipes if hit(r)]


def sort_recipes(recipes: List[Recipe], sort_by: str) -> List[Recipe]:
    if sort_by == "name":
        return sorted(recipes, key=lambda r: r.name.lower())
    if sort_by == "cookingTime":
        return sorted(recipes, key=lambda r: r.cooking_time)
    if sort_by == "rating":
        return sorted(recipes, key=lambda r: r.rating or 0, reverse=True)
    if sort_by == "date":
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(recipes, key=lambda r: r.created_at or epoch, reverse=True)
    return list(recipes)


def calculate_recipe_similarity(a: Recipe, b: Recipe) -> float:
    names_a = [normalize_ingredient_name(i.name) for i in a.ingredients]
    names_b = [normalize_ingredient_name(i.name) for i in b.ingredients]
    union = set(names_a) | set(names_b)
    if not union:
        return 0.0
    common = [n for n in names_a if n in names_b]
    return len(common) / len(union)


def get_recommended_recipes(target: Recipe, recipes: List[Recipe], limit: int = 5) -> List[Recipe]:
    scored = [(calculate_recipe_similarity(target, r), r) for r in recipes if r.id != target.id]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [r for _, r in scored[:limit]]


def check_allergens(recipe: Recipe, allergens: List[str]) -> List[str]:
    return [
        a for a in allergens
        if any(a.lower() in i.name.lower() for i in recipe.ingredients)
    ]


def recipe_to_text(recipe: Recipe) -> str:
    title = capitalize_words(recipe.name)
    lines = [title, "=" * len(title), ""]

    if recipe.description:
        lines += [recipe.description, ""]

    lines.append(f"Cooking Time: {format_cooking_time(recipe.cooking_time)}")
    lines.append(f"Servings: {recipe.servings}")
    lines.append(f"Difficulty: {recipe.difficulty}")
    if recipe.cuisine:
        lines.append(f"Cuisine: {recipe.cuisine}")

    lines += ["", "INGREDIENTS:", "-" * 15]
    lines += [f"{n}. {format_ingredient_quantity(i)}" for n, i in enumerate(recipe.ingredients, start=1)]

    lines += ["", "INSTRUCTIONS:", "-" * 18]
    lines += [f"{n}. {step}" for n, step in enumerate(recipe.steps, start=1)]

    n = recipe.nutrition
    lines += [
        "", "NUTRITION (per serving):", "-" * 28,
        f"Calories: {n.calories:g}",
        f"Protein: {n.protein:g}g",
        f"Carbs: {n.carbs:g}g",
        f"Fat: {n.fat:g}g",
        f"Fiber: {n.fiber:g}g",
    ]

    if recipe.tags:
        lines += ["", f"Tags: {', '.join(recipe.tags)}"]

    lines += ["", "---", "Generated with recipegen", ""]
    return "\n".join(lines)
