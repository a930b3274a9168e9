"""Factory for creating quote providers."""

from __future__ import annotations

import logging

from ..config import Settings
from .interface import QuoteProvider

logger = logging.getLogger(__name__)


def create_quote_provider(settings: Settings) -> QuoteProvider:
    """Create the quote provider named by ``settings.quote_provider``.

    - "simulator" → SimulatedQuoteProvider (offline GBM walk)
    - "massive" with MASSIVE_API_KEY set → MassiveQuoteProvider (prices only)
    - "massive" without a key, "yahoo" or anything else → YahooQuoteProvider
    """
    choice = settings.quote_provider

    if choice == "simulator":
        from .simulator import SimulatedQuoteProvider

        logger.info("Quote provider: GBM simulator")
        return SimulatedQuoteProvider(step_seconds=settings.refresh_interval)

    if choice == "massive":
        if settings.massive_api_key:
            from .massive_client import MassiveQuoteProvider

            logger.info("Quote provider: Massive API (prices only)")
            return MassiveQuoteProvider(api_key=settings.massive_api_key)
        logger.warning("QUOTE_PROVIDER=massive but MASSIVE_API_KEY is empty, using Yahoo")
    elif choice != "yahoo":
        logger.warning("Unknown QUOTE_PROVIDER %r, using Yahoo", choice)

    from .yahoo_client import YahooQuoteProvider

    logger.info("Quote provider: Yahoo Finance")
    return YahooQuoteProvider()
