from unittest.mock import MagicMock

import httpx
import pytest

from recipegen.core.errors import RecognitionFailed
from recipegen.services.recognition import (
    DEMO_INGREDIENTS,
    DEMO_MESSAGE,
    Detection,
    GeminiVisionProvider,
    GoogleVisionProvider,
    HeuristicVisionProvider,
    IngredientRecognizer,
    OpenAIVisionProvider,
    VisionLabel,
    VisionLabels,
    VisionProvider,
    extract_ingredients,
    find_matching_ingredient,
    preprocess_ingredients,
)

IMAGE = "aGVsbG8="


def _vision_transport(payload, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)
    return httpx.MockTransport(handler)


@pytest.mark.parametrize("detected,expected", [
    ("Tomatoes", "tomato"),
    ("Red onion", "onion"),
    ("capsicum", "bell pepper"),
    ("leaf vegetable", "leaf vegetable"),
    ("Natural foods", "natural foods"),
    ("Table", None),
    ("", None),
])
def test_find_matching_ingredient(detected, expected):
    assert find_matching_ingredient(detected) == expected


def test_extract_dedupes_and_keeps_first_confidence():
    result = extract_ingredients([
        Detection("Tomato", 0.9),
        Detection("tomatoes", 0.7),
        Detection("Plate", 0.99),
        Detection("Garlic", 0.6),
    ])
    assert result.ingredients == ["tomato", "garlic"]
    assert result.confidence == [0.9, 0.6]


def test_preprocess_ingredients():
    assert preprocess_ingredients(["Tomatoes ", "eggs", "saffron"]) == ["tomato", "egg", "saffron"]


def test_google_vision_live():
    payload = {"responses": [{
        "localizedObjectAnnotations": [{"name": "Tomato", "score": 0.93}],
        "labelAnnotations": [
            {"description": "Food", "score": 0.97},
            {"description": "Carrot", "score": 0.81},
            {"description": "Tableware", "score": 0.8},
        ],
    }]}
    seen = []
    http = httpx.Client(transport=_vision_transport(payload, seen=seen))
    provider = GoogleVisionProvider(api_key="k", base_url="https://vision.test/v1", http_client=http, mode="live")
    recognizer = IngredientRecognizer(providers=[provider])

    result = recognizer.recognize(IMAGE)

    assert result.source == "google_vision"
    assert result.ingredients == ["tomato", "food", "carrot"]
    assert result.confidence == [0.93, 0.97, 0.81]
    assert result.message is None
    assert seen[0].url.path == "/v1/images:annotate"
    assert seen[0].url.params["key"] == "k"


def test_google_vision_http_error_falls_back_to_demo():
    http = httpx.Client(transport=_vision_transport({"error": "quota"}, status=429))
    provider = GoogleVisionProvider(api_key="k", base_url="https://vision.test/v1", http_client=http, mode="live")

    result = IngredientRecognizer(providers=[provider]).recognize(IMAGE)

    assert result.source == "heuristic"
    assert result.ingredients == list(DEMO_INGREDIENTS)
    assert result.message == DEMO_MESSAGE


def test_google_vision_skipped_in_mock_mode():
    http = httpx.Client(transport=_vision_transport({}))
    provider = GoogleVisionProvider(api_key="k", http_client=http, mode="mock")
    result = IngredientRecognizer(providers=[provider]).recognize(IMAGE)
    assert result.source == "heuristic"


def test_no_food_detected_tries_next_provider():
    payload = {"responses": [{"labelAnnotations": [{"description": "Table", "score": 0.9}]}]}
    http = httpx.Client(transport=_vision_transport(payload))
    google = GoogleVisionProvider(api_key="k", base_url="https://vision.test/v1", http_client=http, mode="live")

    gemini = MagicMock()
    gemini.is_available.return_value = True
    gemini.describe_image_sync.return_value = VisionLabels(ingredients=[
        VisionLabel(name="eggs", confidence=0.9),
        VisionLabel(name="spinach", confidence=0.8),
    ])

    result = IngredientRecognizer(providers=[google, GeminiVisionProvider(gemini)]).recognize(IMAGE)

    assert result.source == "gemini"
    assert result.ingredients == ["egg", "spinach"]


def test_openai_vision_json():
    fake = MagicMock()
    fake.is_available.return_value = True
    fake.chat_json.return_value = '{"ingredients": [{"name": "broccoli", "confidence": 0.88}, "lemon"]}'

    result = IngredientRecognizer(providers=[OpenAIVisionProvider(fake)]).recognize(IMAGE)

    assert result.source == "openai"
    assert result.ingredients == ["broccoli", "lemon"]
    assert result.confidence == [0.88, 0.5]


def test_default_chain_in_mock_mode_uses_demo():
    result = IngredientRecognizer().recognize(IMAGE)
    assert result.source == "heuristic"
    assert result.message == DEMO_MESSAGE


class _BrokenFallback(VisionProvider):
    name = "broken"

    def detect(self, image_base64):
        raise RuntimeError("camera on fire")


def test_exhausted_chain_raises():
    with pytest.raises(RecognitionFailed):
        IngredientRecognizer(providers=[], fallback=_BrokenFallback()).recognize(IMAGE)


def test_heuristic_always_answers():
    detections = HeuristicVisionProvider().detect("")
    assert [d.name for d in detections] == list(DEMO_INGREDIENTS)
