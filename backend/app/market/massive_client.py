"""Massive (Polygon.io) quote provider for real market prices."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from .errors import QuoteChannelError, QuoteFetchError
from .interface import QuoteProvider
from .models import Quote

logger = logging.getLogger(__name__)


class MassiveQuoteProvider(QuoteProvider):
    """QuoteProvider backed by the Massive (Polygon.io) REST API.

    Calls GET /v2/snapshot/locale/us/markets/stocks/tickers/{ticker} once per
    symbol. Massive snapshots carry prices only, so every fundamental field of
    the resulting Quote is None.

    Rate limits:
      - Free tier: 5 req/min, too low for more than a handful of symbols
        at the default 15s refresh interval
      - Paid tiers: effectively unlimited
    """

    name = "massive"

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key
        self._client: Any = None  # Created on first use

    async def fetch_quote(self, symbol: str) -> Quote:
        try:
            snapshot = await asyncio.to_thread(self._fetch_snapshot, symbol)
        except OSError as e:
            raise QuoteChannelError(f"Massive API unreachable: {e}") from e
        except Exception as e:
            # Common failures: 401 (bad key), 404 (unknown ticker), 429 (rate limit)
            raise QuoteFetchError(symbol, str(e) or type(e).__name__) from e

        return Quote(symbol=symbol, regular_market_price=self._price_of(snapshot))

    async def close(self) -> None:
        self._client = None

    @staticmethod
    def _price_of(snapshot: Any) -> float | None:
        """Last trade price, falling back to today's close."""
        for section, attr in (("last_trade", "price"), ("day", "close")):
            value = getattr(getattr(snapshot, section, None), attr, None)
            if isinstance(value, (int, float)) and math.isfinite(value) and value > 0:
                return float(value)
        return None

    def _fetch_snapshot(self, symbol: str) -> Any:
        """Synchronous call to the Massive REST API. Runs in a thread."""
        # Lazy import: the massive package is only needed for this provider.
        from massive import RESTClient
        from massive.rest.models import SnapshotMarketType

        if self._client is None:
            self._client = RESTClient(api_key=self._api_key)
        return self._client.get_snapshot_ticker(
            market_type=SnapshotMarketType.STOCKS,
            ticker=symbol,
        )
