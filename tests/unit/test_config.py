"""
Unit tests for configuration.
"""

import pytest

from workstealing.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        """Test the default slice sizes."""
        monkeypatch.delenv("QUEUE_TRACKER_WORK_COUNT", raising=False)
        monkeypatch.delenv("VOLATILE_REAP_BATCH_SIZE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.queue_tracker_work_count == 25
        assert settings.volatile_reap_batch_size == 5
        assert settings.recruiter_seed is None

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
        monkeypatch.setenv("RECRUITER_SEED", "17")
        monkeypatch.setenv("volatile_reap_batch_size", "10")

        settings = Settings(_env_file=None)

        assert settings.redis_url == "redis://cache:6380/2"
        assert settings.recruiter_seed == 17
        assert settings.volatile_reap_batch_size == 10

    def test_explicit_values(self, test_settings: Settings):
        """Test settings built in code."""
        assert test_settings.recruiter_seed == 1234
        assert test_settings.log_format == "console"
