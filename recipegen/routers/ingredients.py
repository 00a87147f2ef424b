import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.errors import RecognitionFailed
from ..deps import get_classifier, get_recognizer, get_suggestion_engine
from ..schemas import (
    CategorizedIngredients,
    ClassifyRequest,
    RecognitionResult,
    RecognizeRequest,
)
from ..services.classifier import IngredientClassifier
from ..services.recognition import IngredientRecognizer, preprocess_ingredients
from ..services.suggestions import IngredientSuggestionEngine

logger = logging.getLogger("recipegen.api")

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/ingredients/suggest", response_model=List[str])
def suggest(
    q: str = "",
    limit: int = Query(8, ge=1, le=50),
    engine: IngredientSuggestionEngine = Depends(get_suggestion_engine),
):
    return engine.suggest(q, limit)


@router.get("/ingredients/suggest/simple", response_model=List[str])
def simple_suggest(q: str = "", engine: IngredientSuggestionEngine = Depends(get_suggestion_engine)):
    return engine.simple_suggest(q)


@router.get("/ingredients/seasonal", response_model=List[str])
def seasonal(
    month: Optional[int] = Query(None, ge=1, le=12),
    engine: IngredientSuggestionEngine = Depends(get_suggestion_engine),
):
    return engine.seasonal(month)


@router.get("/ingredients/time-of-day", response_model=List[str])
def time_of_day(
    hour: Optional[int] = Query(None, ge=0, le=23),
    engine: IngredientSuggestionEngine = Depends(get_suggestion_engine),
):
    return engine.time_of_day(hour)


@router.post("/ingredients/classify", response_model=CategorizedIngredients)
def classify(body: ClassifyRequest, clf: IngredientClassifier = Depends(get_classifier)):
    return clf.classify(body.ingredients)


@router.post("/ingredients/preprocess", response_model=List[str])
def preprocess(body: ClassifyRequest):
    """Map detector vocabulary onto canonical ingredient names."""
    return preprocess_ingredients(body.ingredients)


@router.post("/ingredients/recognize", response_model=RecognitionResult)
@limiter.limit("20/minute")
def recognize(
    request: Request,  # Required for rate limiter
    body: RecognizeRequest,
    rec: IngredientRecognizer = Depends(get_recognizer),
):
    """
    Detect ingredients in a base64 image.
    Falls back through Google Vision, Gemini and OpenAI to a demo result.
    """
    try:
        return rec.recognize(body.image_base64)
    except RecognitionFailed as e:
        logger.error(f"Ingredient recognition failed: {e}")
        raise HTTPException(status_code=502, detail="Failed to recognize ingredients")
