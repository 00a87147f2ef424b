"""FastAPI dependencies for the recipegen API.

Each getter returns the process-wide component; tests swap them through
app.dependency_overrides.
"""

from .services.classifier import IngredientClassifier, classifier
from .services.health import HealthScorer, health_scorer
from .services.nutrition_service import NutritionResolver, nutrition_resolver
from .services.recipe_providers import RecipeService, recipe_service
from .services.recipe_store import RecipeStore, recipe_store
from .services.recognition import IngredientRecognizer, recognizer
from .services.suggestions import IngredientSuggestionEngine, suggestion_engine


def get_recipe_service() -> RecipeService:
    return recipe_service


def get_store() -> RecipeStore:
    return recipe_store


def get_resolver() -> NutritionResolver:
    return nutrition_resolver


def get_health_scorer() -> HealthScorer:
    return health_scorer


def get_classifier() -> IngredientClassifier:
    return classifier


def get_recognizer() -> IngredientRecognizer:
    return recognizer


def get_suggestion_engine() -> IngredientSuggestionEngine:
    return suggestion_engine
