"""GBM-based quote simulator for running without a market data account."""

from __future__ import annotations

import asyncio
import logging
import math

import numpy as np

from .errors import QuoteFetchError
from .interface import QuoteProvider
from .models import Quote
from .seed_prices import DEFAULT_PARAMS, SEED_FUNDAMENTALS, SEED_PRICES, TICKER_PARAMS

logger = logging.getLogger(__name__)


class PriceWalk:
    """Geometric Brownian Motion price path per symbol.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    dt is one refresh interval expressed as a fraction of a trading year, so
    a 15s step moves a $200 stock by a few cents on average.
    """

    TRADING_SECONDS_PER_YEAR = 252 * 6.5 * 3600  # 5,896,800

    def __init__(self, step_seconds: float = 15.0, seed: int | None = None) -> None:
        self._dt = step_seconds / self.TRADING_SECONDS_PER_YEAR
        self._rng = np.random.default_rng(seed)
        self._prices: dict[str, float] = {}

    def step(self, symbol: str) -> float:
        """Advance one symbol by one time step and return its new price."""
        price = self._prices.get(symbol)
        if price is None:
            price = SEED_PRICES.get(symbol) or float(self._rng.uniform(50.0, 300.0))
        else:
            params = TICKER_PARAMS.get(symbol, DEFAULT_PARAMS)
            mu, sigma = params["mu"], params["sigma"]
            drift = (mu - 0.5 * sigma**2) * self._dt
            diffusion = sigma * math.sqrt(self._dt) * self._rng.standard_normal()
            price *= math.exp(drift + diffusion)
        self._prices[symbol] = price
        return round(price, 2)

    def get_price(self, symbol: str) -> float | None:
        """Current price for a symbol, or None if it has never been stepped."""
        return self._prices.get(symbol)


class SimulatedQuoteProvider(QuoteProvider):
    """QuoteProvider that invents prices locally.

    The first call for a symbol returns its seed price (or a random one for
    unknown symbols); later calls walk it. ``failure_rate`` makes a fraction of
    calls raise QuoteFetchError so degraded snapshots can be exercised offline.
    """

    name = "simulator"

    def __init__(
        self,
        step_seconds: float = 15.0,
        failure_rate: float = 0.0,
        latency: float = 0.0,
        seed: int | None = None,
    ) -> None:
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self._walk = PriceWalk(step_seconds=step_seconds, seed=seed)
        self._failure_rate = failure_rate
        self._latency = latency
        self._rng = np.random.default_rng(seed)

    async def fetch_quote(self, symbol: str) -> Quote:
        if self._latency:
            await asyncio.sleep(self._latency)
        if self._failure_rate and self._rng.random() < self._failure_rate:
            raise QuoteFetchError(symbol, "simulated upstream failure")

        price = self._walk.step(symbol)
        return Quote(
            symbol=symbol,
            regular_market_price=price,
            **SEED_FUNDAMENTALS.get(symbol, {}),
        )
