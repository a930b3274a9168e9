"""Seed prices, fundamentals and walk parameters for the quote simulator."""

# Realistic starting prices (as of project creation)
SEED_PRICES: dict[str, float] = {
    "AAPL": 190.00,
    "MSFT": 420.00,
    "GOOGL": 175.00,
    "NVDA": 800.00,
    "JPM": 195.00,
    "V": 280.00,
    "TSLA": 250.00,
    "XOM": 115.00,
}

# Static fundamentals served alongside the simulated price. Absolute values in
# USD, growth and margin as fractions, mirroring what Yahoo reports.
SEED_FUNDAMENTALS: dict[str, dict[str, float]] = {
    "AAPL": {
        "market_cap": 2.95e12,
        "trailing_pe": 29.5,
        "price_to_sales": 7.6,
        "price_to_book": 45.0,
        "revenue": 3.85e11,
        "ebitda": 1.31e11,
        "net_income": 9.7e10,
        "free_cash_flow": 8.6e10,
        "operating_cash_flow": 1.10e11,
        "revenue_growth": 0.021,
        "gross_margin": 0.458,
    },
    "MSFT": {
        "market_cap": 3.12e12,
        "trailing_pe": 36.2,
        "price_to_sales": 13.4,
        "price_to_book": 12.1,
        "revenue": 2.36e11,
        "ebitda": 1.29e11,
        "net_income": 8.8e10,
        "free_cash_flow": 6.9e10,
        "operating_cash_flow": 1.18e11,
        "revenue_growth": 0.17,
        "gross_margin": 0.70,
    },
    "JPM": {
        "market_cap": 5.6e11,
        "trailing_pe": 11.8,
        "price_to_sales": 3.6,
        "price_to_book": 1.8,
        "revenue": 1.58e11,
        "net_income": 4.9e10,
        "revenue_growth": 0.12,
    },
}

# Per-symbol walk parameters
# sigma: annualized volatility (higher = more price movement)
# mu: annualized drift / expected return
TICKER_PARAMS: dict[str, dict[str, float]] = {
    "AAPL": {"sigma": 0.22, "mu": 0.05},
    "MSFT": {"sigma": 0.20, "mu": 0.05},
    "GOOGL": {"sigma": 0.25, "mu": 0.05},
    "NVDA": {"sigma": 0.40, "mu": 0.08},  # High volatility, strong drift
    "JPM": {"sigma": 0.18, "mu": 0.04},  # Low volatility (bank)
    "V": {"sigma": 0.17, "mu": 0.04},
    "TSLA": {"sigma": 0.50, "mu": 0.03},
    "XOM": {"sigma": 0.24, "mu": 0.04},
}

# Default parameters for symbols not listed above
DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.25, "mu": 0.05}
