"""
Redis connection management.
"""

from functools import lru_cache

from redis import Redis

from workstealing.config import get_settings


@lru_cache
def get_redis() -> Redis:
    """
    Get the shared Redis client.

    Responses are decoded to `str`; the maintenance jobs work with string
    identifiers and field names.

    Returns:
        Redis: Client built from `Settings.redis_url`.
    """
    settings = get_settings()
    return Redis.from_url(settings.redis_url, decode_responses=True)


def close_redis() -> None:
    """Close the shared Redis client, if one was created."""
    if get_redis.cache_info().currsize:
        get_redis().close()
        get_redis.cache_clear()
