"""Abstract interface for quote providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Quote


class QuoteProvider(ABC):
    """Contract for upstream market data providers.

    A provider answers one symbol per call. Concurrency, timeouts and
    per-symbol isolation are the fetcher's job, so implementations stay simple:

        provider = create_quote_provider(settings)
        quote = await provider.fetch_quote("AAPL")
        # ... app shutting down ...
        await provider.close()
    """

    name: str = "provider"

    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch price and fundamentals for one symbol.

        Returns a Quote (possibly with every optional field None when the
        provider has no data). Raises QuoteFetchError when the symbol could not
        be retrieved, QuoteChannelError when the upstream is unreachable.
        """

    async def close(self) -> None:
        """Release provider resources. Safe to call multiple times."""
