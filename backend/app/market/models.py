"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class Quote:
    """Market and fundamental data for one symbol as of fetch time.

    Every field except ``symbol`` may be None: a provider that answers but
    has nothing for a field (or nothing at all) still yields a Quote.
    """

    symbol: str
    regular_market_price: float | None = None
    market_cap: float | None = None
    trailing_pe: float | None = None
    price_to_sales: float | None = None
    price_to_book: float | None = None
    revenue: float | None = None
    ebitda: float | None = None
    net_income: float | None = None
    free_cash_flow: float | None = None
    operating_cash_flow: float | None = None
    revenue_growth: float | None = None  # Fraction, 0.12 == 12%
    gross_margin: float | None = None  # Fraction
    latest_earnings_date: str | None = None  # ISO date of last reported quarter

    @property
    def has_price(self) -> bool:
        """True when the quote carries a usable (non-zero) price."""
        return bool(self.regular_market_price)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self) if f.name != "symbol")


@dataclass(frozen=True, slots=True)
class QuoteResult:
    """Outcome of fetching one symbol: either a Quote or an error message."""

    symbol: str
    quote: Quote | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.quote is not None

    @classmethod
    def success(cls, quote: Quote) -> QuoteResult:
        return cls(symbol=quote.symbol, quote=quote)

    @classmethod
    def failure(cls, symbol: str, error: str) -> QuoteResult:
        return cls(symbol=symbol, error=error)
