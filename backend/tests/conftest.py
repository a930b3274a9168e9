"""Pytest configuration and fixtures."""

import asyncio

import pytest

from app.market.errors import QuoteChannelError, QuoteFetchError
from app.market.interface import QuoteProvider
from app.market.models import Quote
from app.portfolio.holdings import parse_holdings


class FakeQuoteProvider(QuoteProvider):
    """In-memory provider. Symbols not in ``quotes`` or ``errors`` get an empty Quote.

    ``errors`` maps a symbol to the exception instance to raise, ``delays`` to
    seconds to sleep before answering. Every call is recorded in ``calls``.
    """

    name = "fake"

    def __init__(self, quotes=None, errors=None, delays=None):
        self.quotes = dict(quotes or {})
        self.errors = dict(errors or {})
        self.delays = dict(delays or {})
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def fetch_quote(self, symbol):
        self.calls.append(symbol)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if symbol in self.delays:
                await asyncio.sleep(self.delays[symbol])
            if symbol in self.errors:
                raise self.errors[symbol]
            return self.quotes.get(symbol, Quote(symbol=symbol))
        finally:
            self.in_flight -= 1

    async def close(self):
        self.closed = True


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def fake_provider():
    """Factory for FakeQuoteProvider instances."""
    return FakeQuoteProvider


@pytest.fixture
def fetch_error():
    return lambda symbol, msg="boom": QuoteFetchError(symbol, msg)


@pytest.fixture
def channel_error():
    return lambda msg="network down": QuoteChannelError(msg)


@pytest.fixture
def sample_registry():
    """Two sectors, AAPL held in both."""
    return parse_holdings(
        [
            {
                "sector": "Tech",
                "holdings": [
                    {"symbol": "AAPL", "quantity": 10, "purchasePrice": 100},
                    {"symbol": "MSFT", "quantity": 5, "purchasePrice": 200},
                ],
            },
            {
                "sector": "Mixed",
                "holdings": [
                    {"symbol": "JPM", "quantity": 20, "purchasePrice": 50},
                    {"symbol": "AAPL", "quantity": 2, "purchasePrice": 120},
                ],
            },
        ]
    )
