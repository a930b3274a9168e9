"""Concurrent per-symbol quote retrieval with failure isolation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from .errors import QuoteChannelError, QuoteFetchError
from .interface import QuoteProvider
from .models import QuoteResult

logger = logging.getLogger(__name__)


class QuoteFetcher:
    """Fetches a batch of symbols, one provider call per symbol, all at once.

    The batch is a structured join: every call settles (quote, error or
    timeout) before ``fetch`` returns, and one symbol's failure never touches
    another's result. The only error ``fetch`` raises is QuoteChannelError,
    when every symbol failed because the upstream was unreachable or timed out.
    """

    def __init__(self, provider: QuoteProvider, timeout: float | None = 10.0) -> None:
        self._provider = provider
        self._timeout = timeout

    @property
    def provider(self) -> QuoteProvider:
        return self._provider

    async def fetch(self, symbols: Iterable[str]) -> dict[str, QuoteResult]:
        """Return {symbol: QuoteResult} for each distinct symbol."""
        unique = sorted(set(symbols))
        if not unique:
            return {}

        outcomes = await asyncio.gather(*(self._fetch_one(s) for s in unique))

        channel_errors = [o for o in outcomes if isinstance(o, QuoteChannelError)]
        if len(channel_errors) == len(unique):
            raise QuoteChannelError(
                f"all {len(unique)} symbols failed, upstream unreachable: {channel_errors[0]}"
            ) from channel_errors[0]

        results: dict[str, QuoteResult] = {}
        for symbol, outcome in zip(unique, outcomes):
            if isinstance(outcome, QuoteChannelError):
                # Other symbols got through, so treat it as this symbol's problem
                outcome = QuoteResult.failure(symbol, str(outcome))
            results[symbol] = outcome

        failed = sum(1 for r in results.values() if not r.ok)
        logger.debug("Fetched %d/%d symbols (%d failed)", len(unique) - failed, len(unique), failed)
        return results

    async def _fetch_one(self, symbol: str) -> QuoteResult | QuoteChannelError:
        try:
            call = self._provider.fetch_quote(symbol)
            if self._timeout is not None:
                quote = await asyncio.wait_for(call, self._timeout)
            else:
                quote = await call
        except QuoteChannelError as e:
            return e
        except QuoteFetchError as e:
            logger.warning("Quote fetch failed for %s: %s", symbol, e.message)
            return QuoteResult.failure(symbol, e.message)
        except asyncio.TimeoutError:
            # A hung upstream looks like this on every symbol at once
            logger.warning("Quote fetch for %s timed out after %.1fs", symbol, self._timeout)
            return QuoteChannelError(f"{symbol} timed out after {self._timeout}s")
        except Exception as e:
            logger.warning("Unexpected error fetching %s: %r", symbol, e)
            return QuoteResult.failure(symbol, str(e) or type(e).__name__)
        return QuoteResult.success(quote)
