import os

os.environ["AI_MODE"] = "mock"
os.environ.pop("USDA_API_KEY", None)
os.environ.pop("GOOGLE_VISION_API_KEY", None)

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi.testclient import TestClient

from recipegen.infra import redis_client
from recipegen.main import app
from recipegen.schemas import Ingredient, NutritionFacts, Recipe


@pytest.fixture(autouse=True)
def mock_redis():
    server = fakeredis.FakeServer()
    # Create fake clients sharing the same server
    async_redis = fakeredis.aioredis.FakeRedis(server=server, decode_responses=True)
    sync_redis = fakeredis.FakeRedis(server=server, decode_responses=True)

    # Force the clients into the infra module
    redis_client._redis_async = async_redis
    redis_client._redis_sync = sync_redis

    yield sync_redis

    # Cleanup
    redis_client._redis_async = None
    redis_client._redis_sync = None


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_recipe():
    """Factory for saved-recipe fixtures."""
    def _make(recipe_id="r1", name="Chicken Rice Bowl", ingredients=("chicken", "rice"), **kwargs):
        data = dict(
            id=recipe_id,
            name=name,
            description="A test recipe",
            ingredients=[Ingredient(name=n, quantity="1", unit="cup") for n in ingredients],
            steps=["Cook it.", "Serve hot and enjoy!"],
            cooking_time=30,
            servings=2,
            difficulty="Easy",
            cuisine="Asian",
            tags=["dinner"],
            nutrition=NutritionFacts(calories=400, protein=30, carbs=40, fat=10, fiber=3, sugar=2, sodium=300),
        )
        data.update(kwargs)
        return Recipe(**data)
    return _make
