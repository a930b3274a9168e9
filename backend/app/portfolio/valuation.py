"""Valuation engine: holdings + quotes -> Snapshot.

Pure and deterministic. No I/O and no shared state, so the same inputs always
produce an equal Snapshot.

The computation is two-pass because a holding's portfolio percentage needs
the total investment of the whole portfolio:

    1. total_investment = sum(purchase_price * quantity) over every holding
    2. value each holding, then sum holdings into sectors and sectors into
       the portfolio

A holding whose quote is missing, failed, or has no usable price keeps its
investment and portfolio percentage but reports zero for everything priced.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime

from ..market.models import Quote, QuoteResult
from .models import EnrichedHolding, Holding, Sector, SectorSummary, Snapshot


def _or_zero(value: float | None) -> float:
    return value if value is not None else 0.0


def _pct(fraction: float | None) -> float:
    return _or_zero(fraction) * 100


def value_holding(holding: Holding, quote: Quote | None, total_investment: float) -> EnrichedHolding:
    """Value one holding against its quote (None when unavailable)."""
    investment = holding.investment
    portfolio_percentage = investment / total_investment * 100 if total_investment > 0 else 0.0

    if quote is None or not quote.has_price:
        return EnrichedHolding(
            holding=holding,
            cmp=0.0,
            investment=investment,
            present_value=0.0,
            gain_loss=0.0,
            gain_loss_pct=0.0,
            portfolio_percentage=portfolio_percentage,
        )

    cmp = quote.regular_market_price
    present_value = cmp * holding.quantity
    gain_loss = present_value - investment
    return EnrichedHolding(
        holding=holding,
        cmp=cmp,
        investment=investment,
        present_value=present_value,
        gain_loss=gain_loss,
        gain_loss_pct=gain_loss / investment * 100 if investment > 0 else 0.0,
        portfolio_percentage=portfolio_percentage,
        market_cap=_or_zero(quote.market_cap),
        pe_ratio=quote.trailing_pe,
        latest_earnings=quote.latest_earnings_date or "N/A",
        revenue=_or_zero(quote.revenue),
        ebitda=_or_zero(quote.ebitda),
        pat=_or_zero(quote.net_income),
        free_cash_flow=_or_zero(quote.free_cash_flow),
        cfo=_or_zero(quote.operating_cash_flow),
        price_to_sales=quote.price_to_sales,
        price_to_book=quote.price_to_book,
        revenue_percent=_pct(quote.revenue_growth),
        profit_percent=_pct(quote.gross_margin),
    )


def summarize_sector(name: str, holdings: Iterable[EnrichedHolding]) -> SectorSummary:
    holdings = tuple(holdings)
    sector_investment = sum(h.investment for h in holdings)
    sector_value = sum(h.present_value for h in holdings)
    return SectorSummary(
        sector=name,
        sector_investment=sector_investment,
        sector_value=sector_value,
        sector_gain_loss=sector_value - sector_investment,
        holdings=holdings,
    )


def compute_snapshot(
    sectors: Iterable[Sector],
    quote_results: Mapping[str, QuoteResult],
    as_of: datetime,
) -> Snapshot:
    """Build a brand-new Snapshot for one cycle."""
    sectors = tuple(sectors)

    # Pass 1
    total_investment = sum(h.investment for s in sectors for h in s.holdings)

    # Pass 2
    summaries = []
    for sector in sectors:
        enriched = []
        for holding in sector.holdings:
            result = quote_results.get(holding.symbol)
            quote = result.quote if result is not None else None
            enriched.append(value_holding(holding, quote, total_investment))
        summaries.append(summarize_sector(sector.name, enriched))

    return Snapshot(
        total_investment=sum(s.sector_investment for s in summaries),
        total_value=sum(s.sector_value for s in summaries),
        sectors=tuple(summaries),
        timestamp=as_of,
    )
