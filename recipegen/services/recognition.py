"""
Ingredient recognition from photos.

Vision providers return raw detections (object/label names with scores).
Detections are mapped to canonical ingredient names; generic food terms pass
through verbatim and everything else is dropped. A provider whose detections
map to nothing counts as a miss and the next provider is tried. The chain
ends with a fixed demo set so callers always get something to edit.
"""

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Iterable, List, Mapping, NamedTuple, Optional, Sequence

import httpx
from pydantic import BaseModel

from ..core.ai_client import AIClient, OpenAIClient, ai_client, openai_client
from ..core.errors import ProviderError, ProviderNotConfigured, RecognitionFailed
from ..core.text import extract_json_object
from ..schemas import RecognitionResult
from ..settings import settings

logger = logging.getLogger("recipegen.ai")

INGREDIENT_MAPPING: Mapping[str, str] = MappingProxyType({
    "tomato": "tomato",
    "tomatoes": "tomato",
    "onion": "onion",
    "onions": "onion",
    "potato": "potato",
    "potatoes": "potato",
    "carrot": "carrot",
    "carrots": "carrot",
    "bell pepper": "bell pepper",
    "capsicum": "bell pepper",
    "garlic": "garlic",
    "ginger": "ginger",
    "spinach": "spinach",
    "lettuce": "lettuce",
    "cucumber": "cucumber",
    "broccoli": "broccoli",
    "cauliflower": "cauliflower",
    "mushroom": "mushroom",
    "mushrooms": "mushroom",
    "chicken": "chicken",
    "beef": "beef",
    "pork": "pork",
    "fish": "fish",
    "egg": "egg",
    "eggs": "egg",
    "cheese": "cheese",
    "milk": "milk",
    "bread": "bread",
    "rice": "rice",
    "pasta": "pasta",
    "lemon": "lemon",
    "lime": "lime",
    "apple": "apple",
    "banana": "banana",
    "orange": "orange",
})

FOOD_KEYWORDS = (
    "vegetable", "fruit", "meat", "dairy", "grain", "herb", "spice",
    "produce", "organic", "fresh", "food", "ingredient",
)

DEMO_INGREDIENTS = ("tomato", "onion", "garlic", "bell pepper", "carrot")
DEMO_CONFIDENCES = (0.95, 0.88, 0.82, 0.76, 0.71)
DEMO_MESSAGE = "Using demo recognition - actual results may vary"

VISION_PROMPT = (
    "List the food ingredients visible in this photo. "
    'Return JSON only: {"ingredients": [{"name": string, "confidence": number between 0 and 1}]}. '
    "Use plain generic names in English, no brands."
)


class Detection(NamedTuple):
    name: str
    confidence: float


class VisionLabel(BaseModel):
    name: str
    confidence: float = 0.5


class VisionLabels(BaseModel):
    ingredients: List[VisionLabel]


def find_matching_ingredient(detected: str, mapping: Mapping[str, str] = INGREDIENT_MAPPING) -> Optional[str]:
    name = detected.lower().strip()
    if not name:
        return None

    if name in mapping:
        return mapping[name]

    for key, value in mapping.items():
        if key in name or name in key:
            return value

    if any(k in name for k in FOOD_KEYWORDS):
        return name

    return None


def extract_ingredients(
    detections: Iterable[Detection],
    mapping: Mapping[str, str] = INGREDIENT_MAPPING,
) -> RecognitionResult:
    ingredients: List[str] = []
    confidences: List[float] = []
    for d in detections:
        mapped = find_matching_ingredient(d.name, mapping)
        if mapped and mapped not in ingredients:
            ingredients.append(mapped)
            confidences.append(float(d.confidence))
    return RecognitionResult(ingredients=ingredients, confidence=confidences)


def preprocess_ingredients(names: Iterable[str], mapping: Mapping[str, str] = INGREDIENT_MAPPING) -> List[str]:
    """Canonicalize typed ingredient names ("Tomatoes " -> "tomato")."""
    out = []
    for n in names:
        normalized = n.lower().strip()
        out.append(mapping.get(normalized, normalized))
    return out


def _labels_from_json(data) -> List[Detection]:
    items = data.get("ingredients") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    out = []
    for it in items:
        if isinstance(it, str):
            out.append(Detection(it, 0.5))
        elif isinstance(it, dict) and it.get("name"):
            out.append(Detection(str(it["name"]), float(it.get("confidence") or 0.5)))
    return out


class VisionProvider(ABC):
    name: str = "vision"

    @abstractmethod
    def detect(self, image_base64: str) -> List[Detection]:
        """Return raw detections or raise ProviderError."""


class GoogleVisionProvider(VisionProvider):
    name = "google_vision"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        mode: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_vision_api_key
        self.mode = mode or settings.ai_mode
        self.base_url = (base_url or settings.vision_base_url).rstrip("/")
        self._http = http_client

    def detect(self, image_base64: str) -> List[Detection]:
        if not self.api_key or self.mode != "live":
            raise ProviderNotConfigured(self.name, "no GOOGLE_VISION_API_KEY")

        body = {
            "requests": [{
                "image": {"content": image_base64},
                "features": [
                    {"type": "OBJECT_LOCALIZATION", "maxResults": 20},
                    {"type": "LABEL_DETECTION", "maxResults": 20},
                ],
            }]
        }
        client = self._http or httpx.Client(timeout=settings.provider_timeout_sec)
        try:
            resp = client.post(f"{self.base_url}/images:annotate", params={"key": self.api_key}, json=body)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(self.name, str(e)) from e
        finally:
            if self._http is None:
                client.close()

        responses = data.get("responses") or []
        if not responses:
            raise ProviderError(self.name, "no annotations in response")

        first = responses[0]
        objects = [Detection(o.get("name", ""), o.get("score", 0.0)) for o in first.get("localizedObjectAnnotations") or []]
        labels = [Detection(l.get("description", ""), l.get("score", 0.0)) for l in first.get("labelAnnotations") or []]
        return objects + labels


class GeminiVisionProvider(VisionProvider):
    name = "gemini"

    def __init__(self, client: Optional[AIClient] = None):
        self.client = client or ai_client

    def detect(self, image_base64: str) -> List[Detection]:
        if not self.client.is_available():
            raise ProviderNotConfigured(self.name, "gemini client unavailable")

        result = self.client.describe_image_sync(image_base64, VISION_PROMPT, VisionLabels)
        if result is None:
            raise ProviderError(self.name, self.client.last_error or "empty response")
        data = result.model_dump() if isinstance(result, BaseModel) else result
        return _labels_from_json(data)


class OpenAIVisionProvider(VisionProvider):
    name = "openai"

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or openai_client

    def detect(self, image_base64: str) -> List[Detection]:
        if not self.client.is_available():
            raise ProviderNotConfigured(self.name, "openai client unavailable")

        content = [
            {"type": "text", "text": VISION_PROMPT},
            {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}},
        ]
        text = self.client.chat_json(
            [{"role": "user", "content": content}],
            model=settings.openai_vision_model,
            max_tokens=400,
        )
        if text is None:
            raise ProviderError(self.name, self.client.last_error or "empty response")
        try:
            return _labels_from_json(extract_json_object(text))
        except ValueError as e:
            raise ProviderError(self.name, str(e)) from e


class HeuristicVisionProvider(VisionProvider):
    name = "heuristic"
    message = DEMO_MESSAGE

    def detect(self, image_base64: str) -> List[Detection]:
        return [Detection(n, c) for n, c in zip(DEMO_INGREDIENTS, DEMO_CONFIDENCES)]


class IngredientRecognizer:
    def __init__(
        self,
        providers: Optional[Sequence[VisionProvider]] = None,
        fallback: Optional[VisionProvider] = None,
        mapping: Mapping[str, str] = INGREDIENT_MAPPING,
    ):
        self.providers = list(providers) if providers is not None else [
            GoogleVisionProvider(),
            GeminiVisionProvider(),
            OpenAIVisionProvider(),
        ]
        self.fallback = fallback or HeuristicVisionProvider()
        self.mapping = mapping

    def recognize(self, image_base64: str) -> RecognitionResult:
        for provider in self.providers:
            try:
                detections = provider.detect(image_base64)
            except ProviderNotConfigured as e:
                logger.debug("Skipping %s: %s", provider.name, e.reason)
                continue
            except ProviderError as e:
                logger.warning(f"{provider.name} recognition failed ({e.reason}), falling through")
                continue
            except Exception as e:
                logger.warning(f"{provider.name} recognition raised {e.__class__.__name__}: {e}, falling through")
                continue

            result = extract_ingredients(detections, self.mapping)
            if result.ingredients:
                result.source = provider.name
                return result
            logger.info("%s returned no recognizable ingredients (%d detections)", provider.name, len(detections))

        try:
            detections = self.fallback.detect(image_base64)
        except Exception as e:
            raise RecognitionFailed(str(e)) from e

        result = extract_ingredients(detections, self.mapping)
        if not result.ingredients:
            raise RecognitionFailed("no ingredients recognized")
        result.source = self.fallback.name
        result.message = getattr(self.fallback, "message", None)
        return result


recognizer = IngredientRecognizer()
