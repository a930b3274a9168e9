"""Market data error types."""

from __future__ import annotations


class QuoteFetchError(Exception):
    """Retrieving a single symbol failed. Other symbols are unaffected."""

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol
        self.message = message


class QuoteChannelError(Exception):
    """The upstream provider could not be reached at all.

    Raised by a provider for one call when the failure is clearly network-level,
    and by the fetcher when every symbol of a batch failed that way.
    """
