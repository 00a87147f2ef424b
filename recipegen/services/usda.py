import logging
from typing import Any, Optional

import httpx

from ..infra import redis_cache
from ..settings import settings
from .nutrition_tables import NUTRIENT_FIELDS

logger = logging.getLogger("recipegen.nutrition")

CACHE_TTL_SEC = 7 * 24 * 3600


def parse_food_nutrients(data: dict) -> dict:
    """Map a FoodData Central food payload to our nutrient fields (per 100 g)."""
    out = {f: 0.0 for f in NUTRIENT_FIELDS}
    for nutrient in data.get("foodNutrients") or []:
        name = ((nutrient.get("nutrient") or {}).get("name") or "").lower()
        value = nutrient.get("amount") or 0

        if "energy" in name or "calorie" in name:
            out["calories"] = value
        elif "protein" in name:
            out["protein"] = value
        elif "carbohydrate" in name:
            out["carbs"] = value
        elif "total lipid" in name or "fat" in name:
            out["fat"] = value
        elif "fiber" in name:
            out["fiber"] = value
        elif "sugar" in name:
            out["sugar"] = value
        elif "sodium" in name:
            out["sodium"] = value
    return out


class USDALookup:
    """Optional FoodData Central lookup. Returns None whenever anything goes wrong."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.usda_api_key
        self.base_url = (base_url or settings.usda_base_url).rstrip("/")
        self.timeout = timeout or settings.provider_timeout_sec
        self._http = http_client

    def is_available(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.Client:
        if self._http is None:
            self._http = httpx.Client(timeout=self.timeout)
        return self._http

    def _fetch(self, name: str) -> Optional[dict]:
        client = self._client()
        search = client.get(
            f"{self.base_url}/foods/search",
            params={"query": name, "api_key": self.api_key, "pageSize": 1},
        )
        search.raise_for_status()
        foods = search.json().get("foods") or []
        if not foods:
            return None

        detail = client.get(
            f"{self.base_url}/food/{foods[0]['fdcId']}",
            params={"api_key": self.api_key},
        )
        detail.raise_for_status()
        return parse_food_nutrients(detail.json())

    def __call__(self, name: str) -> Optional[dict[str, Any]]:
        if not self.is_available():
            return None
        try:
            data, hit = redis_cache.get_or_set_json_sync(
                redis_cache.key("usda", name), CACHE_TTL_SEC, lambda: self._fetch(name)
            )
            if hit:
                logger.debug("USDA cache hit for %s", name)
            return data
        except Exception as e:
            logger.warning("USDA lookup failed for %s: %s", name, e)
            return None
