from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_store
from ..schemas import (
    ALLERGY_OPTIONS,
    CUISINE_OPTIONS,
    DIETARY_OPTIONS,
    TASTE_OPTIONS,
    User,
    UserPreferences,
)
from ..services.recipe_store import RecipeStore

router = APIRouter()


@router.get("/prefs", response_model=UserPreferences)
def get_prefs(store: RecipeStore = Depends(get_store)):
    return store.get_preferences() or UserPreferences()


@router.put("/prefs", response_model=UserPreferences)
def put_prefs(prefs: UserPreferences, store: RecipeStore = Depends(get_store)):
    if not store.save_preferences(prefs):
        raise HTTPException(status_code=503, detail="Preferences could not be saved")
    return prefs


@router.get("/prefs/options")
def pref_options():
    return {
        "dietaryRestrictions": DIETARY_OPTIONS,
        "allergies": ALLERGY_OPTIONS,
        "cuisinePreferences": CUISINE_OPTIONS,
        "tastePreferences": TASTE_OPTIONS,
        "spiceLevel": ["Mild", "Medium", "Hot"],
    }


@router.get("/user", response_model=User)
def get_user(store: RecipeStore = Depends(get_store)):
    user = store.get_user()
    if not user:
        raise HTTPException(status_code=404, detail="No user profile")
    return user


@router.put("/user", response_model=User)
def put_user(user: User, store: RecipeStore = Depends(get_store)):
    if not store.save_user(user):
        raise HTTPException(status_code=503, detail="User could not be saved")
    return user


@router.delete("/data")
def clear_data(store: RecipeStore = Depends(get_store)):
    """Remove every stored recipe, preference, user and history entry."""
    if not store.clear_all():
        raise HTTPException(status_code=503, detail="Store unavailable")
    return {"ok": True}
