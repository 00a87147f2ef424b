from fastapi import APIRouter, Depends

from ..deps import get_health_scorer, get_resolver
from ..schemas import (
    DailyValuesRequest,
    HealthAnalysis,
    NutritionFacts,
    NutritionRequest,
)
from ..services.health import HealthScorer
from ..services.nutrition_service import NutritionResolver

router = APIRouter()


@router.post("/nutrition/calculate", response_model=NutritionFacts)
def calculate(body: NutritionRequest, resolver: NutritionResolver = Depends(get_resolver)):
    """Per-serving nutrition for a list of ingredients."""
    return resolver.calculate_recipe_nutrition(body.ingredients, body.servings)


@router.post("/nutrition/analyze", response_model=HealthAnalysis)
def analyze(nutrition: NutritionFacts, scorer: HealthScorer = Depends(get_health_scorer)):
    return scorer.analyze(nutrition)


@router.post("/nutrition/daily-values")
def daily_values(body: DailyValuesRequest, resolver: NutritionResolver = Depends(get_resolver)):
    return resolver.calculate_daily_values(body.nutrition, body.age, body.gender)


@router.get("/nutrition/ingredients")
def known_ingredients(resolver: NutritionResolver = Depends(get_resolver)):
    return {"ingredients": resolver.available_ingredients()}


@router.get("/nutrition/ingredient/{name}", response_model=NutritionFacts)
def ingredient_info(name: str, resolver: NutritionResolver = Depends(get_resolver)):
    """Nutrition for 100 g of a single ingredient."""
    return resolver.ingredient_nutrition_info(name)


@router.put("/nutrition/ingredient/{name}", response_model=NutritionFacts)
def set_ingredient_info(
    name: str,
    facts: NutritionFacts,
    resolver: NutritionResolver = Depends(get_resolver),
):
    """Add or override a per-100 g table entry for this process."""
    resolver.add_custom_nutrition(name, facts)
    return resolver.ingredient_nutrition_info(name)
