import json
from typing import Any, Callable, Optional

from recipegen.infra.redis_client import get_sync_redis
from recipegen.settings import settings

def key(*parts: str) -> str:
    return ":".join((settings.store_prefix, *parts))

def get_json_sync(name: str) -> Any:
    raw = get_sync_redis().get(name)
    return json.loads(raw) if raw else None

def set_json_sync(name: str, value: Any, ttl_sec: Optional[int] = None) -> None:
    get_sync_redis().set(name, json.dumps(value), ex=ttl_sec)

def delete_sync(*names: str) -> int:
    if not names:
        return 0
    return get_sync_redis().delete(*names)

def get_or_set_json_sync(name: str, ttl_sec: int, compute_func: Callable[[], Any]):
    hit = get_json_sync(name)
    if hit is not None:
        return hit, True

    val = compute_func()
    if val is not None:
        set_json_sync(name, val, ttl_sec)
    return val, False
