"""
Key-value persistence for recipes, the user record, preferences and history.

Each collection is one JSON document under its own redis key. Storage errors
are logged and reported as False / None / empty results so a broken store
never takes generation down with it.
"""

import logging
from collections import Counter
from typing import List, Optional

from pydantic import ValidationError
from redis.exceptions import RedisError

from ..infra import redis_cache
from ..schemas import Recipe, RecipeStats, User, UserPreferences
from ..settings import settings

logger = logging.getLogger("recipegen.store")

RECIPES_KEY = "recipes"
USER_KEY = "user"
PREFERENCES_KEY = "preferences"
HISTORY_KEY = "history"

FAVORITE_MIN_RATING = 4

STORE_ERRORS = (RedisError, ValidationError, ValueError, TypeError)


class RecipeStore:
    def __init__(self, history_limit: Optional[int] = None):
        self.history_limit = history_limit or settings.history_limit

    @staticmethod
    def _key(name: str) -> str:
        return redis_cache.key(name)

    def _load_recipes(self) -> List[Recipe]:
        raw = redis_cache.get_json_sync(self._key(RECIPES_KEY)) or []
        return [Recipe.model_validate(r) for r in raw]

    def _write_recipes(self, recipes: List[Recipe]) -> None:
        redis_cache.set_json_sync(
            self._key(RECIPES_KEY),
            [r.model_dump(mode="json", by_alias=True) for r in recipes],
        )

    # --- recipes ---

    def save_recipe(self, recipe: Recipe) -> bool:
        try:
            recipes = [r for r in self._load_recipes() if r.id != recipe.id]
            recipes.append(recipe)
            self._write_recipes(recipes)
            return True
        except STORE_ERRORS as e:
            logger.error(f"Error saving recipe {recipe.id}: {e}")
            return False

    def get_all_recipes(self) -> List[Recipe]:
        try:
            return self._load_recipes()
        except STORE_ERRORS as e:
            logger.error(f"Error getting recipes: {e}")
            return []

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return next((r for r in self.get_all_recipes() if r.id == recipe_id), None)

    def update_recipe(self, recipe: Recipe) -> bool:
        try:
            recipes = self._load_recipes()
            for i, existing in enumerate(recipes):
                if existing.id == recipe.id:
                    recipes[i] = recipe
                    self._write_recipes(recipes)
                    return True
            return False
        except STORE_ERRORS as e:
            logger.error(f"Error updating recipe {recipe.id}: {e}")
            return False

    def delete_recipe(self, recipe_id: str) -> bool:
        try:
            recipes = self._load_recipes()
            kept = [r for r in recipes if r.id != recipe_id]
            self._write_recipes(kept)
            return len(kept) != len(recipes)
        except STORE_ERRORS as e:
            logger.error(f"Error deleting recipe {recipe_id}: {e}")
            return False

    # --- queries ---

    def search_by_ingredients(self, ingredients: List[str]) -> List[Recipe]:
        wanted = [i.lower() for i in ingredients if i]
        return [
            r for r in self.get_all_recipes()
            if any(w in ing.name.lower() for w in wanted for ing in r.ingredients)
        ]

    def search(self, query: str) -> List[Recipe]:
        q = query.lower()
        return [
            r for r in self.get_all_recipes()
            if q in r.name.lower()
            or q in (r.description or "").lower()
            or any(q in t.lower() for t in r.tags)
            or q in (r.cuisine or "").lower()
        ]

    def by_difficulty(self, difficulty: str) -> List[Recipe]:
        return [r for r in self.get_all_recipes() if r.difficulty == difficulty]

    def by_cooking_time(self, max_minutes: int) -> List[Recipe]:
        return [r for r in self.get_all_recipes() if r.cooking_time <= max_minutes]

    def favorites(self) -> List[Recipe]:
        return [r for r in self.get_all_recipes() if (r.rating or 0) >= FAVORITE_MIN_RATING]

    def rate_recipe(self, recipe_id: str, rating: int) -> bool:
        if not 1 <= rating <= 5:
            raise ValueError(f"rating must be between 1 and 5, got {rating}")
        recipe = self.get_recipe(recipe_id)
        if recipe is None:
            return False
        recipe.rating = rating
        return self.update_recipe(recipe)

    # --- user & preferences ---

    def save_preferences(self, prefs: UserPreferences) -> bool:
        try:
            redis_cache.set_json_sync(self._key(PREFERENCES_KEY), prefs.model_dump(by_alias=True))
            return True
        except STORE_ERRORS as e:
            logger.error(f"Error saving user preferences: {e}")
            return False

    def get_preferences(self) -> Optional[UserPreferences]:
        try:
            raw = redis_cache.get_json_sync(self._key(PREFERENCES_KEY))
            return UserPreferences.model_validate(raw) if raw else None
        except STORE_ERRORS as e:
            logger.error(f"Error getting user preferences: {e}")
            return None

    def save_user(self, user: User) -> bool:
        try:
            redis_cache.set_json_sync(self._key(USER_KEY), user.model_dump(by_alias=True))
            return True
        except STORE_ERRORS as e:
            logger.error(f"Error saving user: {e}")
            return False

    def get_user(self) -> Optional[User]:
        try:
            raw = redis_cache.get_json_sync(self._key(USER_KEY))
            return User.model_validate(raw) if raw else None
        except STORE_ERRORS as e:
            logger.error(f"Error getting user: {e}")
            return None

    # --- history ---

    def add_to_history(self, recipe_id: str) -> bool:
        try:
            history = redis_cache.get_json_sync(self._key(HISTORY_KEY)) or []
            history = [recipe_id] + [h for h in history if h != recipe_id]
            redis_cache.set_json_sync(self._key(HISTORY_KEY), history[:self.history_limit])
            return True
        except STORE_ERRORS as e:
            logger.error(f"Error adding to recipe history: {e}")
            return False

    def get_history(self) -> List[Recipe]:
        try:
            ids = redis_cache.get_json_sync(self._key(HISTORY_KEY)) or []
        except STORE_ERRORS as e:
            logger.error(f"Error getting recipe history: {e}")
            return []
        by_id = {r.id: r for r in self.get_all_recipes()}
        return [by_id[i] for i in ids if i in by_id]

    # --- maintenance ---

    def clear_all(self) -> bool:
        try:
            redis_cache.delete_sync(*(self._key(k) for k in (RECIPES_KEY, USER_KEY, PREFERENCES_KEY, HISTORY_KEY)))
            return True
        except STORE_ERRORS as e:
            logger.error(f"Error clearing data: {e}")
            return False

    def stats(self) -> RecipeStats:
        recipes = self.get_all_recipes()
        if not recipes:
            return RecipeStats()

        avg = sum(r.cooking_time for r in recipes) / len(recipes)
        cuisines = Counter(r.cuisine for r in recipes if r.cuisine)
        most_used = ""
        best = 0
        # ties go to the cuisine seen last
        for cuisine, count in cuisines.items():
            if count >= best:
                most_used, best = cuisine, count

        return RecipeStats(
            total_recipes=len(recipes),
            average_cooking_time=int(avg + 0.5),
            most_used_cuisine=most_used,
            favorite_count=len([r for r in recipes if (r.rating or 0) >= FAVORITE_MIN_RATING]),
        )


recipe_store = RecipeStore()
