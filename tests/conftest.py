"""
Pytest configuration and shared fixtures.
"""

import fakeredis
import pytest
from prometheus_client import CollectorRegistry

from fakes import FakeClock
from workstealing.config import Settings
from workstealing.observability.metrics import MetricsCollector
from workstealing.recruiter import reset_recruiter


@pytest.fixture(autouse=True)
def _reset_recruiter():
    """Drop the process-wide recruiter between tests."""
    yield
    reset_recruiter()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        redis_url="redis://localhost:6379/15",
        recruiter_seed=1234,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def metrics() -> MetricsCollector:
    """Metrics collector on a private registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    """One in-memory Redis server shared by every client of a test."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(fake_server: fakeredis.FakeServer) -> fakeredis.FakeRedis:
    """Client used by the job under test."""
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def racing_client(fake_server: fakeredis.FakeServer) -> fakeredis.FakeRedis:
    """Second connection standing in for a concurrent worker."""
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def clock() -> FakeClock:
    """Clock pinned at t=1000 until advanced."""
    return FakeClock()
