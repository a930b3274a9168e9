"""Yahoo Finance quote provider (via yfinance)."""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any

from .errors import QuoteChannelError, QuoteFetchError
from .interface import QuoteProvider
from .models import Quote

logger = logging.getLogger(__name__)

# Quote field -> Yahoo info keys, first non-empty wins. Ticker.info merges the
# price, defaultKeyStatistics, financialData, earnings, summaryDetail and
# assetProfile quoteSummary modules into one flat dict.
_INFO_KEYS: dict[str, tuple[str, ...]] = {
    "regular_market_price": ("regularMarketPrice", "currentPrice"),
    "market_cap": ("marketCap",),
    "trailing_pe": ("trailingPE",),
    "price_to_sales": ("priceToSalesTrailing12Months",),
    "price_to_book": ("priceToBook",),
    "revenue": ("totalRevenue",),
    "ebitda": ("ebitda",),
    "net_income": ("netIncomeToCommon",),
    "free_cash_flow": ("freeCashflow",),
    "operating_cash_flow": ("operatingCashflow",),
    "revenue_growth": ("revenueGrowth",),
    "gross_margin": ("grossMargins",),
}


def _number(value: Any) -> float | None:
    """Coerce a Yahoo value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None  # Yahoo sometimes sends "Infinity" or "N/A"
    return number if math.isfinite(number) else None


def _iso_date(epoch_seconds: Any) -> str | None:
    seconds = _number(epoch_seconds)
    if seconds is None:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc).date().isoformat()


def quote_from_info(symbol: str, info: dict[str, Any] | None) -> Quote:
    """Build a Quote from a yfinance ``Ticker.info`` dict. Missing keys become None."""
    info = info or {}
    values: dict[str, float | None] = {}
    for field_name, keys in _INFO_KEYS.items():
        values[field_name] = next(
            (n for n in (_number(info.get(k)) for k in keys) if n is not None),
            None,
        )
    return Quote(
        symbol=symbol,
        latest_earnings_date=_iso_date(info.get("mostRecentQuarter")),
        **values,
    )


class YahooQuoteProvider(QuoteProvider):
    """QuoteProvider backed by Yahoo Finance.

    yfinance is synchronous, so each lookup runs in a worker thread to keep
    the event loop free while the per-symbol calls of a cycle are in flight.
    """

    name = "yahoo"

    async def fetch_quote(self, symbol: str) -> Quote:
        try:
            info = await asyncio.to_thread(self._fetch_info, symbol)
        except OSError as e:
            # ConnectionError and friends: the upstream itself is unreachable
            raise QuoteChannelError(f"Yahoo Finance unreachable: {e}") from e
        except Exception as e:
            raise QuoteFetchError(symbol, str(e) or type(e).__name__) from e

        quote = quote_from_info(symbol, info)
        if quote.is_empty():
            logger.debug("Yahoo returned no data for %s", symbol)
        return quote

    def _fetch_info(self, symbol: str) -> dict[str, Any]:
        """Synchronous call to Yahoo Finance. Runs in a thread."""
        # Lazy import: yfinance pulls in pandas
        import yfinance as yf

        return yf.Ticker(symbol).info
