"""
Unit tests for Redis connection management.
"""

import pytest

from workstealing.config import get_settings
from workstealing.store import close_redis, get_redis


@pytest.fixture
def redis_url(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache.internal:6380/3")
    get_settings.cache_clear()
    get_redis.cache_clear()

    yield

    close_redis()
    get_settings.cache_clear()


def test_client_built_from_settings(redis_url):
    """Test that the shared client targets the configured server."""
    client = get_redis()

    kwargs = client.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.internal"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 3
    assert kwargs["decode_responses"] is True
    assert get_redis() is client


def test_close_discards_client(redis_url):
    """Test that closing forgets the shared client."""
    client = get_redis()

    close_redis()

    assert get_redis() is not client
