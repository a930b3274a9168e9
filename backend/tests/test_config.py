"""Tests for Settings.from_env."""

from pathlib import Path

import pytest

from app.config import DEFAULT_HOLDINGS_FILE, Settings


class TestSettings:
    """Unit tests for environment-driven settings."""

    def test_defaults(self):
        """Test defaults with an empty environment."""
        settings = Settings.from_env({})
        assert settings.refresh_interval == 15.0
        assert settings.quote_provider == "yahoo"
        assert settings.quote_timeout == 10.0
        assert settings.holdings_file == DEFAULT_HOLDINGS_FILE
        assert settings.log_level == "INFO"

    def test_overrides(self):
        """Test that each variable is read."""
        settings = Settings.from_env(
            {
                "HOLDINGS_FILE": "/tmp/h.json",
                "REFRESH_INTERVAL_SECONDS": "5",
                "QUOTE_PROVIDER": " Simulator ",
                "MASSIVE_API_KEY": " key ",
                "QUOTE_TIMEOUT_SECONDS": "2.5",
                "SINK_QUEUE_SIZE": "8",
                "LOG_LEVEL": "debug",
            }
        )
        assert settings.holdings_file == Path("/tmp/h.json")
        assert settings.refresh_interval == 5.0
        assert settings.quote_provider == "simulator"
        assert settings.massive_api_key == "key"
        assert settings.quote_timeout == 2.5
        assert settings.sink_queue_size == 8
        assert settings.log_level == "DEBUG"

    def test_zero_timeout_disables(self):
        """Test that a non-positive timeout disables it."""
        assert Settings.from_env({"QUOTE_TIMEOUT_SECONDS": "0"}).quote_timeout is None

    def test_invalid_interval(self):
        """Test that a non-numeric interval is rejected."""
        with pytest.raises(ValueError, match="REFRESH_INTERVAL_SECONDS"):
            Settings.from_env({"REFRESH_INTERVAL_SECONDS": "soon"})

    def test_non_positive_interval(self):
        """Test that a zero interval is rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({"REFRESH_INTERVAL_SECONDS": "0"})

    def test_invalid_queue_size(self):
        """Test that a zero queue size is rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({"SINK_QUEUE_SIZE": "0"})
