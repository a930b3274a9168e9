"""Tests for Quote and QuoteResult."""

import pytest

from app.market.models import Quote, QuoteResult


class TestQuote:
    """Unit tests for the Quote model."""

    def test_defaults_are_absent(self):
        """Test that only the symbol is required."""
        quote = Quote(symbol="AAPL")
        assert quote.regular_market_price is None
        assert quote.trailing_pe is None
        assert quote.latest_earnings_date is None

    def test_has_price(self):
        """Test has_price with a real price."""
        assert Quote(symbol="AAPL", regular_market_price=150.0).has_price

    def test_zero_price_is_not_a_price(self):
        """Test that a zero price counts as missing."""
        assert not Quote(symbol="AAPL", regular_market_price=0.0).has_price
        assert not Quote(symbol="AAPL").has_price

    def test_is_empty(self):
        """Test is_empty ignores the symbol."""
        assert Quote(symbol="AAPL").is_empty()
        assert not Quote(symbol="AAPL", market_cap=1e9).is_empty()

    def test_immutability(self):
        """Test that Quote is immutable."""
        quote = Quote(symbol="AAPL", regular_market_price=150.0)
        with pytest.raises(AttributeError):
            quote.regular_market_price = 200.0


class TestQuoteResult:
    """Unit tests for QuoteResult."""

    def test_success(self):
        """Test a successful result carries the quote."""
        quote = Quote(symbol="AAPL", regular_market_price=150.0)
        result = QuoteResult.success(quote)
        assert result.ok
        assert result.symbol == "AAPL"
        assert result.quote is quote
        assert result.error is None

    def test_failure(self):
        """Test a failed result carries the error message."""
        result = QuoteResult.failure("AAPL", "timed out")
        assert not result.ok
        assert result.quote is None
        assert result.error == "timed out"

    def test_empty_quote_is_still_ok(self):
        """Test that a quote with no data is a success, not an error."""
        assert QuoteResult.success(Quote(symbol="AAPL")).ok
