"""Portfolio Pulse backend: live portfolio valuation pushed to subscribers."""
