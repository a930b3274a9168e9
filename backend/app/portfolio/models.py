"""Portfolio data models: configured holdings and computed valuations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Holding:
    """A position in one symbol within a sector."""

    symbol: str
    sector: str
    quantity: float
    purchase_price: float

    @property
    def investment(self) -> float:
        return self.purchase_price * self.quantity

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "sector": self.sector,
            "quantity": self.quantity,
            "purchasePrice": self.purchase_price,
        }


@dataclass(frozen=True, slots=True)
class Sector:
    """A named, ordered group of holdings. Fixed at load time."""

    name: str
    holdings: tuple[Holding, ...]


@dataclass(frozen=True, slots=True)
class EnrichedHolding:
    """A Holding valued against one cycle's quote."""

    holding: Holding
    cmp: float  # Current market price
    investment: float
    present_value: float
    gain_loss: float
    gain_loss_pct: float
    portfolio_percentage: float
    market_cap: float = 0.0
    pe_ratio: float | None = None
    latest_earnings: str = "N/A"
    revenue: float = 0.0
    ebitda: float = 0.0
    pat: float = 0.0  # Profit after tax
    free_cash_flow: float = 0.0
    cfo: float = 0.0  # Cash flow from operations
    price_to_sales: float | None = None
    price_to_book: float | None = None
    revenue_percent: float = 0.0
    profit_percent: float = 0.0

    @property
    def symbol(self) -> str:
        return self.holding.symbol

    def to_dict(self) -> dict:
        """Serialize for JSON transmission (camelCase keys)."""
        return {
            **self.holding.to_dict(),
            "cmp": self.cmp,
            "investment": self.investment,
            "presentValue": self.present_value,
            "gainLoss": self.gain_loss,
            "gainLossPct": self.gain_loss_pct,
            "portfolioPercentage": self.portfolio_percentage,
            "marketCap": self.market_cap,
            "peRatio": self.pe_ratio,
            "latestEarnings": self.latest_earnings,
            "revenue": self.revenue,
            "ebitda": self.ebitda,
            "pat": self.pat,
            "freeCashFlow": self.free_cash_flow,
            "cfo": self.cfo,
            "priceToSales": self.price_to_sales,
            "priceToBook": self.price_to_book,
            "revenuePercent": self.revenue_percent,
            "profitPercent": self.profit_percent,
        }


@dataclass(frozen=True, slots=True)
class SectorSummary:
    sector: str
    sector_investment: float
    sector_value: float
    sector_gain_loss: float
    holdings: tuple[EnrichedHolding, ...]

    def to_dict(self) -> dict:
        return {
            "sector": self.sector,
            "sectorInvestment": self.sector_investment,
            "sectorValue": self.sector_value,
            "sectorGainLoss": self.sector_gain_loss,
            "holdings": [h.to_dict() for h in self.holdings],
        }


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Complete valuation of the portfolio for one cycle. The unit of publication."""

    total_investment: float
    total_value: float
    sectors: tuple[SectorSummary, ...]
    timestamp: datetime

    @property
    def total_gain_loss(self) -> float:
        return self.total_value - self.total_investment

    def holdings(self) -> list[EnrichedHolding]:
        """All enriched holdings, in sector order."""
        return [h for s in self.sectors for h in s.holdings]

    def to_dict(self) -> dict:
        return {
            "totalInvestment": self.total_investment,
            "totalValue": self.total_value,
            "sectors": [s.to_dict() for s in self.sectors],
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), allow_nan=False)
