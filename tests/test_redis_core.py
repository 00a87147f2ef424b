from unittest.mock import AsyncMock

import pytest

from recipegen.infra import redis_client
from recipegen.infra.redis_client import get_redis, ping


@pytest.mark.asyncio
async def test_redis_connection():
    r = await get_redis()
    assert await r.ping() is True
    assert await ping() is True


@pytest.mark.asyncio
async def test_async_client_shares_sync_data(mock_redis):
    r = await get_redis()
    await r.set("recipegen:test", "hello")
    assert mock_redis.get("recipegen:test") == "hello"


@pytest.mark.asyncio
async def test_ping_reports_unreachable_redis():
    broken = AsyncMock()
    broken.ping.side_effect = ConnectionError("connection refused")
    redis_client._redis_async = broken

    assert await ping() is False
