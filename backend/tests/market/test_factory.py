"""Tests for quote provider factory."""

from app.config import Settings
from app.market.factory import create_quote_provider
from app.market.massive_client import MassiveQuoteProvider
from app.market.simulator import SimulatedQuoteProvider
from app.market.yahoo_client import YahooQuoteProvider


class TestFactory:
    """Tests for create_quote_provider factory."""

    def test_defaults_to_yahoo(self):
        """Test that Yahoo is used with default settings."""
        assert isinstance(create_quote_provider(Settings()), YahooQuoteProvider)

    def test_creates_simulator(self):
        """Test that QUOTE_PROVIDER=simulator creates the simulator."""
        source = create_quote_provider(Settings(quote_provider="simulator"))
        assert isinstance(source, SimulatedQuoteProvider)

    def test_creates_massive_when_api_key_set(self):
        """Test that Massive is created when a key is configured."""
        source = create_quote_provider(Settings(quote_provider="massive", massive_api_key="test-key-123"))
        assert isinstance(source, MassiveQuoteProvider)
        assert source._api_key == "test-key-123"

    def test_massive_without_key_falls_back_to_yahoo(self):
        """Test that Massive without an API key falls back to Yahoo."""
        source = create_quote_provider(Settings(quote_provider="massive", massive_api_key=""))
        assert isinstance(source, YahooQuoteProvider)

    def test_unknown_provider_falls_back_to_yahoo(self):
        """Test that an unknown provider name falls back to Yahoo."""
        source = create_quote_provider(Settings(quote_provider="bloomberg"))
        assert isinstance(source, YahooQuoteProvider)
