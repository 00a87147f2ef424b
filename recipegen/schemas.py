from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack", "Dessert"]
Difficulty = Literal["Easy", "Medium", "Hard"]
SpiceLevel = Literal["Mild", "Medium", "Hot"]

# Palettes offered to clients. Stored preferences are free-form strings.
DIETARY_OPTIONS = [
    "Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free", "Keto",
    "Paleo", "Low-Carb", "Low-Fat", "High-Protein", "Pescatarian",
]
ALLERGY_OPTIONS = [
    "Nuts", "Peanuts", "Shellfish", "Fish", "Eggs",
    "Dairy", "Soy", "Wheat", "Sesame",
]
CUISINE_OPTIONS = [
    "Italian", "Asian", "Mexican", "Indian", "Mediterranean",
    "American", "French", "Thai", "Japanese", "Chinese", "Middle Eastern",
]
TASTE_OPTIONS = ["Sweet", "Savory", "Spicy", "Sour", "Umami", "Bitter"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NutritionFacts(BaseModel):
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    sugar: float = Field(0, ge=0)
    sodium: float = Field(0, ge=0)


class Ingredient(BaseModel):
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None


class UserPreferences(CamelModel):
    dietary_restrictions: List[str] = Field(default_factory=list, alias="dietaryRestrictions")
    allergies: List[str] = Field(default_factory=list)
    taste_preferences: List[str] = Field(default_factory=list, alias="tastePreferences")
    cuisine_preferences: List[str] = Field(default_factory=list, alias="cuisinePreferences")
    spice_level: SpiceLevel = Field("Medium", alias="spiceLevel")


class RecipeGenerationRequest(CamelModel):
    ingredients: List[str] = Field(min_length=1)
    exclude_ingredients: List[str] = Field(default_factory=list, alias="excludeIngredients")
    preferences: Optional[UserPreferences] = None
    meal_type: Optional[MealType] = Field(None, alias="mealType")
    cooking_time: Optional[int] = Field(None, alias="cookingTime", ge=1)
    servings: Optional[int] = Field(None, ge=1)

    @field_validator("ingredients")
    @classmethod
    def _strip_blank(cls, v: List[str]) -> List[str]:
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError("at least one ingredient is required")
        return cleaned


class Recipe(CamelModel):
    id: str
    name: str
    description: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    cooking_time: int = Field(30, alias="cookingTime")
    servings: int = Field(4, ge=1)
    difficulty: Difficulty = "Medium"
    cuisine: str = "International"
    tags: List[str] = Field(default_factory=list)
    nutrition: NutritionFacts = Field(default_factory=NutritionFacts)
    rating: Optional[int] = Field(None, ge=1, le=5)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")


class User(CamelModel):
    id: str
    name: str
    email: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    saved_recipes: List[str] = Field(default_factory=list, alias="savedRecipes")
    created_recipes: List[str] = Field(default_factory=list, alias="createdRecipes")


class CategorizedIngredients(BaseModel):
    proteins: List[str] = Field(default_factory=list)
    vegetables: List[str] = Field(default_factory=list)
    grains: List[str] = Field(default_factory=list)
    dairy: List[str] = Field(default_factory=list)
    spices: List[str] = Field(default_factory=list)
    others: List[str] = Field(default_factory=list)


class HealthAnalysis(CamelModel):
    analysis: List[str] = Field(default_factory=list)
    health_score: int = Field(50, ge=0, le=100, alias="healthScore")
    recommendations: List[str] = Field(default_factory=list)


class GenerationResult(BaseModel):
    recipe: Recipe
    source: str  # gemini, openai or rule_based
    message: Optional[str] = None


class RecognitionResult(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
    confidence: List[float] = Field(default_factory=list)
    source: str = "heuristic"
    message: Optional[str] = None


class RecognizeRequest(CamelModel):
    image_base64: str = Field(alias="imageBase64", min_length=1)


class NutritionRequest(BaseModel):
    ingredients: List[Ingredient] = Field(default_factory=list)
    servings: int = Field(1, ge=1)


class DailyValuesRequest(BaseModel):
    nutrition: NutritionFacts
    age: int = Field(30, ge=1, le=120)
    gender: Literal["male", "female"] = "male"


class ClassifyRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)


class RatingRequest(BaseModel):
    rating: int


class RecipeStats(CamelModel):
    total_recipes: int = Field(0, alias="totalRecipes")
    average_cooking_time: int = Field(0, alias="averageCookingTime")
    most_used_cuisine: str = Field("", alias="mostUsedCuisine")
    favorite_count: int = Field(0, alias="favoriteCount")
