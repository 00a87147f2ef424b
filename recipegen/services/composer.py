"""
Rule-based recipe composer.

Builds a complete Recipe from a generation request without any network
access: classify ingredients, template a name, derive ordered cooking steps,
estimate quantities, then infer cuisine, tags and difficulty. Nutrition is
left at zero for the pipeline to back-fill.
"""

import logging
import random
from typing import List, Optional, Sequence

from ..schemas import (
    CategorizedIngredients,
    Ingredient,
    NutritionFacts,
    Recipe,
    RecipeGenerationRequest,
)
from .classifier import CATEGORY_ORDER, IngredientClassifier, classifier as default_classifier
from .quantity import QuantityEstimator, quantity_estimator as default_estimator
from .recipe_utils import generate_recipe_id

logger = logging.getLogger("recipegen.composer")

DEFAULT_MEAL_TYPE = "Dinner"
DEFAULT_COOKING_TIME = 30
DEFAULT_SERVINGS = 4

NAME_TEMPLATES = (
    lambda ings, meal: f"{' and '.join(ings)} {meal}",
    lambda ings, meal: f"{ings[0]} with {' and '.join(ings[1:])}".strip(),
    lambda ings, meal: f"{'-'.join(ings)} Delight",
    lambda ings, meal: f"Homestyle {' '.join(ings)} Bowl",
)

BROWNING_MEATS = ("chicken", "beef", "pork")
HARD_VEGETABLES = ("carrot", "potato", "onion")

# (keywords, cuisine); any keyword anywhere in the joined names matches
CUISINE_RULES = (
    (("soy sauce", "ginger", "rice"), "Asian"),
    (("pasta", "tomato", "basil"), "Italian"),
    (("cumin", "coriander", "turmeric"), "Indian"),
    (("lime", "cilantro", "chili"), "Mexican"),
)
DEFAULT_CUISINE = "International"

STEP_PREP = "Wash and prepare all ingredients. Chop vegetables and measure out spices."
STEP_BEAT_EGGS = "Beat eggs in a bowl and set aside for later use."
STEP_RICE = "Add rice with appropriate amount of water or broth. Cover and simmer until tender."
STEP_PASTA = "Cook pasta according to package directions. Drain and add to the pan."
STEP_COMBINE = (
    "Stir everything together and cook for a few more minutes until heated through. "
    "Taste and adjust seasoning as needed."
)
STEP_SERVE = "Serve hot and enjoy!"


def _minutes(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _contains_any(name: str, keywords: Sequence[str]) -> bool:
    lower = name.lower()
    return any(k in lower for k in keywords)


class RecipeComposer:
    def __init__(
        self,
        classifier: Optional[IngredientClassifier] = None,
        estimator: Optional[QuantityEstimator] = None,
        rng: Optional[random.Random] = None,
    ):
        self.classifier = classifier or default_classifier
        self.estimator = estimator or default_estimator
        self.rng = rng or random.Random()

    def filter_ingredients(self, request: RecipeGenerationRequest) -> List[str]:
        blocked = [x.lower().strip() for x in request.exclude_ingredients if x and x.strip()]
        if request.preferences:
            blocked += [x.lower().strip() for x in request.preferences.allergies if x and x.strip()]
        if not blocked:
            return list(request.ingredients)

        kept = [i for i in request.ingredients if not any(b in i.lower() for b in blocked)]
        if not kept:
            logger.info("All ingredients excluded; composing with the full list")
            return list(request.ingredients)
        return kept

    def name(self, main: List[str], meal_type: str) -> str:
        if not main:
            return f"Mixed {meal_type}"
        template = self.rng.choice(NAME_TEMPLATES)
        return template(main, meal_type)

    def steps(self, cats: CategorizedIngredients, cooking_time: int) -> List[str]:
        steps = [STEP_PREP]

        if cats.proteins:
            if any(_contains_any(p, BROWNING_MEATS) for p in cats.proteins):
                steps.append(
                    "Heat oil in a large pan over medium-high heat. "
                    f"Cook {' and '.join(cats.proteins)} until browned and cooked through, "
                    f"about {_minutes(min(cooking_time * 0.4, 15))} minutes."
                )
            elif any("egg" in p.lower() for p in cats.proteins):
                steps.append(STEP_BEAT_EGGS)

        if cats.vegetables:
            hard = [v for v in cats.vegetables if _contains_any(v, HARD_VEGETABLES)]
            soft = [v for v in cats.vegetables if v not in hard]
            if hard:
                steps.append(
                    f"Add {' and '.join(hard)} to the pan and cook for "
                    f"{_minutes(min(cooking_time * 0.3, 10))} minutes until softened."
                )
            if soft:
                steps.append(
                    f"Add {' and '.join(soft)} and cook for another "
                    f"{_minutes(min(cooking_time * 0.2, 5))} minutes."
                )

        if cats.grains:
            if any("rice" in g.lower() for g in cats.grains):
                steps.append(STEP_RICE)
            elif any("pasta" in g.lower() for g in cats.grains):
                steps.append(STEP_PASTA)

        if cats.spices:
            steps.append(f"Season with {', '.join(cats.spices)} to taste.")

        steps.append(STEP_COMBINE)
        steps.append(STEP_SERVE)
        return steps

    def ingredients(self, cats: CategorizedIngredients, servings: int) -> List[Ingredient]:
        out = []
        for category in (*CATEGORY_ORDER, "others"):
            for name in getattr(cats, category):
                qty = self.estimator.estimate(name, servings)
                out.append(Ingredient(name=name, quantity=qty.quantity, unit=qty.unit, category=category))
        return out

    @staticmethod
    def cuisine(ingredients: List[Ingredient]) -> str:
        joined = " ".join(i.name.lower() for i in ingredients)
        for keywords, cuisine in CUISINE_RULES:
            if any(k in joined for k in keywords):
                return cuisine
        return DEFAULT_CUISINE

    @staticmethod
    def tags(cats: CategorizedIngredients, meal_type: str) -> List[str]:
        tags = [meal_type.lower()]
        if not cats.proteins:
            tags.append("vegetarian")
        if not cats.dairy and not cats.proteins:
            tags.append("vegan")
        if len(cats.vegetables) > len(cats.proteins):
            tags.append("healthy")
        tags.extend(["homemade", "easy"])
        return tags

    @staticmethod
    def difficulty(step_count: int, cooking_time: int, ingredient_count: int) -> str:
        score = step_count * 0.3 + cooking_time * 0.01 + ingredient_count * 0.1
        if score < 3:
            return "Easy"
        if score < 6:
            return "Medium"
        return "Hard"

    def compose(self, request: RecipeGenerationRequest) -> Recipe:
        meal_type = request.meal_type or DEFAULT_MEAL_TYPE
        cooking_time = request.cooking_time or DEFAULT_COOKING_TIME
        servings = request.servings or DEFAULT_SERVINGS

        cats = self.classifier.classify(self.filter_ingredients(request))
        main = (cats.proteins + cats.vegetables + cats.grains)[:3]

        steps = self.steps(cats, cooking_time)
        ingredients = self.ingredients(cats, servings)

        return Recipe(
            id=generate_recipe_id(self.rng),
            name=self.name(main, meal_type),
            description=f"A delicious {meal_type.lower()} made with {', '.join(main)}",
            ingredients=ingredients,
            steps=steps,
            cooking_time=cooking_time,
            servings=servings,
            difficulty=self.difficulty(len(steps), cooking_time, len(ingredients)),
            cuisine=self.cuisine(ingredients),
            tags=self.tags(cats, meal_type),
            nutrition=NutritionFacts(),
        )


composer = RecipeComposer()
