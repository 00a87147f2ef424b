"""
Router for recipe generation and the saved-recipe collection.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ..deps import get_recipe_service, get_store
from ..schemas import (
    GenerationResult,
    RatingRequest,
    Recipe,
    RecipeGenerationRequest,
    RecipeStats,
)
from ..services.recipe_providers import RecipeService
from ..services.recipe_store import RecipeStore
from ..services.recipe_utils import (
    SORT_KEYS,
    calculate_recipe_difficulty,
    check_allergens,
    extract_unique_ingredients,
    filter_recipes_by_diet,
    generate_slug,
    get_recommended_recipes,
    recipe_to_text,
    search_recipes,
    sort_recipes,
    validate_recipe,
)

logger = logging.getLogger("recipegen.api")

router = APIRouter()


def _get_or_404(store: RecipeStore, recipe_id: str) -> Recipe:
    recipe = store.get_recipe(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/recipes/generate", response_model=GenerationResult)
def generate_recipe(
    request: RecipeGenerationRequest,
    service: RecipeService = Depends(get_recipe_service),
    store: RecipeStore = Depends(get_store),
):
    """Generate a recipe (AI providers, then rule-based) and save it to history."""
    if request.preferences is None:
        request.preferences = store.get_preferences()

    result = service.generate(request)

    if store.save_recipe(result.recipe):
        store.add_to_history(result.recipe.id)
    else:
        logger.warning("Generated recipe %s could not be saved", result.recipe.id)

    return result


@router.get("/recipes", response_model=List[Recipe])
def list_recipes(
    q: Optional[str] = None,
    difficulty: Optional[str] = None,
    max_time: Optional[int] = Query(None, ge=1),
    diet: List[str] = Query(default=[]),
    sort: Optional[str] = None,
    store: RecipeStore = Depends(get_store),
):
    if sort and sort not in SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"sort must be one of {', '.join(SORT_KEYS)}")

    recipes = store.get_all_recipes()
    recipes = search_recipes(recipes, q)
    if difficulty:
        recipes = [r for r in recipes if r.difficulty == difficulty]
    if max_time:
        recipes = [r for r in recipes if r.cooking_time <= max_time]
    recipes = filter_recipes_by_diet(recipes, diet)
    if sort:
        recipes = sort_recipes(recipes, sort)
    return recipes


@router.get("/recipes/favorites", response_model=List[Recipe])
def favorite_recipes(store: RecipeStore = Depends(get_store)):
    return store.favorites()


@router.get("/recipes/history", response_model=List[Recipe])
def recipe_history(store: RecipeStore = Depends(get_store)):
    return store.get_history()


@router.get("/recipes/stats", response_model=RecipeStats)
def recipe_stats(store: RecipeStore = Depends(get_store)):
    return store.stats()


@router.get("/recipes/ingredients", response_model=List[str])
def used_ingredients(store: RecipeStore = Depends(get_store)):
    """Unique normalized ingredient names across saved recipes."""
    return extract_unique_ingredients(store.get_all_recipes())


@router.get("/recipes/{recipe_id}", response_model=Recipe)
def get_recipe(recipe_id: str, store: RecipeStore = Depends(get_store)):
    return _get_or_404(store, recipe_id)


@router.put("/recipes/{recipe_id}", response_model=Recipe)
def update_recipe(
    recipe_id: str,
    payload: dict = Body(...),
    store: RecipeStore = Depends(get_store),
):
    """Apply user edits (full or partial, camelCase keys) to a saved recipe."""
    existing = _get_or_404(store, recipe_id)

    merged = existing.model_dump(by_alias=True)
    merged.update(payload)
    merged["id"] = existing.id
    merged["createdAt"] = existing.created_at

    ok, errors = validate_recipe(merged)
    if not ok:
        raise HTTPException(status_code=422, detail=errors)

    try:
        recipe = Recipe.model_validate(merged)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False, include_input=False))
    recipe.difficulty = calculate_recipe_difficulty(recipe)

    if not store.update_recipe(recipe):
        raise HTTPException(status_code=503, detail="Recipe store unavailable")
    return recipe


@router.delete("/recipes/{recipe_id}")
def delete_recipe(recipe_id: str, store: RecipeStore = Depends(get_store)):
    if not store.delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"ok": True}


@router.post("/recipes/{recipe_id}/rating", response_model=Recipe)
def rate_recipe(recipe_id: str, body: RatingRequest, store: RecipeStore = Depends(get_store)):
    try:
        ok = store.rate_recipe(recipe_id, body.rating)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not ok:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return _get_or_404(store, recipe_id)


@router.get("/recipes/{recipe_id}/text", response_class=PlainTextResponse)
def recipe_text(recipe_id: str, store: RecipeStore = Depends(get_store)):
    recipe = _get_or_404(store, recipe_id)
    filename = f"{generate_slug(recipe.name) or recipe.id}.txt"
    return PlainTextResponse(
        recipe_to_text(recipe),
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.get("/recipes/{recipe_id}/allergens", response_model=List[str])
def recipe_allergens(
    recipe_id: str,
    allergen: List[str] = Query(default=[]),
    store: RecipeStore = Depends(get_store),
):
    """Allergens present in the recipe; defaults to the saved preferences' allergies."""
    recipe = _get_or_404(store, recipe_id)
    if not allergen:
        prefs = store.get_preferences()
        allergen = prefs.allergies if prefs else []
    return check_allergens(recipe, allergen)


@router.get("/recipes/{recipe_id}/recommendations", response_model=List[Recipe])
def recommendations(
    recipe_id: str,
    limit: int = Query(5, ge=1, le=20),
    store: RecipeStore = Depends(get_store),
):
    target = _get_or_404(store, recipe_id)
    return get_recommended_recipes(target, store.get_all_recipes(), limit)
