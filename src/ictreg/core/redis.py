"""
Redis Connection

Process-wide async Redis client. It backs the sliding-window rate limiter
(login attempts, pin redemption attempts). Redis is optional in
development: when it is down the limiter falls back to process memory.
"""

import logging

from redis.asyncio import Redis, from_url

from ictreg.core.config import settings

logger = logging.getLogger(__name__)

redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to Redis and verify the connection.

    Called once from the application lifespan.
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await client.ping()
    redis_client = client
    return redis_client


async def get_redis() -> Redis | None:
    """
    FastAPI dependency returning the shared client, or None when Redis
    was not initialized.
    """
    return redis_client


def is_redis_available() -> bool:
    """Whether the shared client has been initialized."""
    return redis_client is not None


async def close_redis() -> None:
    """Close the shared client."""
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")
