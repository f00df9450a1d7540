"""
Unit tests for rate limiting.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ictreg.core import rate_limit
from ictreg.core.rate_limit import RateLimitExceeded, check_rate_limit, enforce_rate_limit


@pytest.fixture(autouse=True)
def clear_memory_store():
    rate_limit._memory_store.clear()
    yield
    rate_limit._memory_store.clear()


class TestMemoryFallback:
    """Without Redis the limiter counts in process memory."""

    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self):
        with patch.object(rate_limit.redis_module, "redis_client", None):
            results = [await check_rate_limit("login:10.0.0.1", 3, 60) for _ in range(4)]

        assert results == [True, True, True, False]

    @pytest.mark.asyncio
    async def test_keys_are_independent(self):
        with patch.object(rate_limit.redis_module, "redis_client", None):
            assert await check_rate_limit("login:a", 1, 60) is True
            assert await check_rate_limit("login:b", 1, 60) is True
            assert await check_rate_limit("login:a", 1, 60) is False

    @pytest.mark.asyncio
    async def test_enforce_raises_429(self):
        with patch.object(rate_limit.redis_module, "redis_client", None):
            await enforce_rate_limit("course_registration:CS/1", 1, 300)

            with pytest.raises(RateLimitExceeded) as exc_info:
                await enforce_rate_limit("course_registration:CS/1", 1, 300)

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers["Retry-After"] == "300"


class TestRedis:
    @pytest.mark.asyncio
    async def test_uses_sorted_set_count(self):
        client = MagicMock()
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[0, 5, 1, True])
        client.pipeline.return_value = pipe

        with patch.object(rate_limit.redis_module, "redis_client", client):
            assert await check_rate_limit("login:x", 5, 60) is False

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_memory(self):
        client = MagicMock()
        client.pipeline.side_effect = ConnectionError("redis down")

        with patch.object(rate_limit.redis_module, "redis_client", client):
            assert await check_rate_limit("login:y", 1, 60) is True
            assert await check_rate_limit("login:y", 1, 60) is False
