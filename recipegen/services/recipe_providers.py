"""
Recipe generation providers.

Each provider turns a RecipeGenerationRequest into a Recipe or raises
ProviderError. RecipeService walks them in order and always ends with the
rule-based composer, which cannot fail for a valid request.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from ..core.ai_client import AIClient, OpenAIClient, ai_client, openai_client
from ..core.errors import ProviderError, ProviderNotConfigured
from ..core.text import clean_md, extract_json_object
from ..schemas import (
    GenerationResult,
    Ingredient,
    NutritionFacts,
    Recipe,
    RecipeGenerationRequest,
)
from .composer import DEFAULT_COOKING_TIME, DEFAULT_SERVINGS, RecipeComposer, composer as default_composer
from .nutrition_service import NutritionResolver, nutrition_resolver
from .recipe_utils import generate_recipe_id

logger = logging.getLogger("recipegen.ai")

RULE_BASED_MESSAGE = "Recipe generated using smart cooking rules"

SYSTEM_PROMPT = (
    "You are a professional chef and recipe creator. Generate detailed, practical recipes "
    "based on available ingredients. Always return valid JSON format with the exact structure requested."
)

RESPONSE_SHAPE = """{
  "name": "Recipe Name",
  "description": "Brief description",
  "ingredients": [
    {"name": "ingredient name", "quantity": "amount", "unit": "measurement unit"}
  ],
  "steps": ["step 1", "step 2", "step 3"],
  "cookingTime": 30,
  "servings": 4,
  "difficulty": "Easy",
  "cuisine": "cuisine type",
  "tags": ["tag1", "tag2"],
  "nutrition": {"calories": 350, "protein": 25, "carbs": 30, "fat": 15, "fiber": 5, "sugar": 8, "sodium": 500}
}"""


class DraftIngredient(BaseModel):
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


class DraftNutrition(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0


class RecipeDraft(BaseModel):
    """Structured-output schema for Gemini."""
    name: str
    description: str
    ingredients: List[DraftIngredient]
    steps: List[str]
    cookingTime: int
    servings: int
    difficulty: str
    cuisine: str
    tags: List[str]
    nutrition: Optional[DraftNutrition] = None


def build_recipe_prompt(request: RecipeGenerationRequest) -> str:
    prompt = f"Generate a detailed recipe using these ingredients: {', '.join(request.ingredients)}.\n\n"

    if request.meal_type:
        prompt += f"Meal type: {request.meal_type}\n"
    if request.cooking_time:
        prompt += f"Maximum cooking time: {request.cooking_time} minutes\n"
    if request.servings:
        prompt += f"Servings: {request.servings}\n"

    prefs = request.preferences
    if prefs and prefs.dietary_restrictions:
        prompt += f"Dietary restrictions: {', '.join(prefs.dietary_restrictions)}\n"
    if prefs and prefs.allergies:
        prompt += f"Allergies to avoid: {', '.join(prefs.allergies)}\n"
    if request.exclude_ingredients:
        prompt += f"Do not use these ingredients: {', '.join(request.exclude_ingredients)}\n"

    prompt += f"\nPlease return the response as a valid JSON object with this exact structure:\n{RESPONSE_SHAPE}"
    return prompt


def _as_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def _nutrition(value: Any) -> NutritionFacts:
    if not isinstance(value, dict):
        return NutritionFacts()
    clean = {}
    for k, v in value.items():
        try:
            clean[k] = max(float(v), 0)
        except (TypeError, ValueError):
            continue
    try:
        return NutritionFacts(**clean)
    except ValidationError:
        return NutritionFacts()


def recipe_from_data(data: Any, request: RecipeGenerationRequest, provider: str = "ai") -> Recipe:
    """
    Build a Recipe from a model's JSON payload, filling gaps with defaults.
    Raises ProviderError when the payload is unusable (not an object, list fields
    of another type, or no steps).
    """
    if not isinstance(data, dict):
        raise ProviderError(provider, "response is not a JSON object")

    for field in ("steps", "ingredients", "tags"):
        if data.get(field) is not None and not isinstance(data[field], list):
            raise ProviderError(provider, f"{field} is not a list")

    steps = [clean_md(str(s)) for s in data.get("steps") or [] if str(s).strip()]
    steps = [s for s in steps if s]
    if not steps:
        raise ProviderError(provider, "response has no steps")

    ingredients = []
    for raw in data.get("ingredients") or []:
        if isinstance(raw, str):
            raw = {"name": raw}
        if not isinstance(raw, dict) or not str(raw.get("name") or "").strip():
            continue
        ingredients.append(Ingredient(
            name=str(raw["name"]).strip(),
            quantity=str(raw["quantity"]) if raw.get("quantity") not in (None, "") else None,
            unit=str(raw["unit"]) if raw.get("unit") else None,
        ))

    difficulty = data.get("difficulty")
    if difficulty not in ("Easy", "Medium", "Hard"):
        difficulty = "Medium"

    return Recipe(
        id=generate_recipe_id(),
        name=clean_md(str(data.get("name") or "")) or "Generated Recipe",
        description=str(data.get("description") or ""),
        ingredients=ingredients,
        steps=steps,
        cooking_time=_as_int(data.get("cookingTime", data.get("cooking_time")), request.cooking_time or DEFAULT_COOKING_TIME),
        servings=_as_int(data.get("servings"), request.servings or DEFAULT_SERVINGS),
        difficulty=difficulty,
        cuisine=str(data.get("cuisine") or ""),
        tags=[str(t) for t in data.get("tags") or []],
        nutrition=_nutrition(data.get("nutrition")),
    )


def parse_recipe_response(text: Optional[str], request: RecipeGenerationRequest, provider: str = "ai") -> Recipe:
    try:
        data = extract_json_object(text)
    except ValueError as e:
        raise ProviderError(provider, str(e)) from e
    return recipe_from_data(data, request, provider)


class RecipeProvider(ABC):
    name: str = "provider"

    @abstractmethod
    def generate(self, request: RecipeGenerationRequest) -> Recipe:
        """Produce a recipe or raise ProviderError."""


class GeminiRecipeProvider(RecipeProvider):
    name = "gemini"

    def __init__(self, client: Optional[AIClient] = None):
        self.client = client or ai_client

    def generate(self, request: RecipeGenerationRequest) -> Recipe:
        if not self.client.is_available():
            raise ProviderNotConfigured(self.name, "gemini client unavailable")

        result = self.client.generate_content_sync(
            prompt=build_recipe_prompt(request),
            response_model=RecipeDraft,
            system_instruction=SYSTEM_PROMPT,
        )
        if result is None:
            raise ProviderError(self.name, self.client.last_error or "empty response")

        data = result.model_dump() if isinstance(result, BaseModel) else result
        return recipe_from_data(data, request, self.name)


class OpenAIRecipeProvider(RecipeProvider):
    name = "openai"

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or openai_client

    def generate(self, request: RecipeGenerationRequest) -> Recipe:
        if not self.client.is_available():
            raise ProviderNotConfigured(self.name, "openai client unavailable")

        text = self.client.chat_json([
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_recipe_prompt(request)},
        ])
        if text is None:
            raise ProviderError(self.name, self.client.last_error or "empty response")
        return parse_recipe_response(text, request, self.name)


class RuleBasedRecipeProvider(RecipeProvider):
    name = "rule_based"

    def __init__(self, composer: Optional[RecipeComposer] = None):
        self.composer = composer or default_composer

    def generate(self, request: RecipeGenerationRequest) -> Recipe:
        return self.composer.compose(request)


class RecipeService:
    def __init__(
        self,
        providers: Optional[Sequence[RecipeProvider]] = None,
        resolver: Optional[NutritionResolver] = None,
        fallback: Optional[RecipeProvider] = None,
    ):
        self.providers = list(providers) if providers is not None else [
            GeminiRecipeProvider(),
            OpenAIRecipeProvider(),
        ]
        self.fallback = fallback or RuleBasedRecipeProvider()
        self.resolver = resolver or nutrition_resolver

    def backfill_nutrition(self, recipe: Recipe) -> Recipe:
        if recipe.nutrition.calories > 0 or not recipe.ingredients:
            return recipe
        recipe.nutrition = self.resolver.calculate_recipe_nutrition(recipe.ingredients, recipe.servings)
        return recipe

    def generate(self, request: RecipeGenerationRequest) -> GenerationResult:
        if not request.ingredients:
            raise ValueError("at least one ingredient is required")

        for provider in self.providers:
            try:
                recipe = provider.generate(request)
            except ProviderNotConfigured as e:
                logger.debug("Skipping %s: %s", provider.name, e.reason)
                continue
            except ProviderError as e:
                logger.warning(f"{provider.name} recipe generation failed ({e.reason}), falling through")
                continue
            except Exception as e:
                logger.warning(f"{provider.name} recipe generation raised {e.__class__.__name__}: {e}, falling through")
                continue

            logger.info("Recipe %s generated by %s", recipe.id, provider.name)
            return GenerationResult(recipe=self.backfill_nutrition(recipe), source=provider.name)

        recipe = self.fallback.generate(request)
        return GenerationResult(
            recipe=self.backfill_nutrition(recipe),
            source=self.fallback.name,
            message=RULE_BASED_MESSAGE,
        )


recipe_service = RecipeService()
