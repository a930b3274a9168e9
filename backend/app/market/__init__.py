"""Market data subsystem.

Public API:
    Quote               - Immutable price + fundamentals record for one symbol
    QuoteResult         - Per-symbol success-or-failure outcome of a fetch
    QuoteProvider       - Abstract interface for upstream providers
    QuoteFetcher        - Concurrent, failure-isolated batch fetch
    QuoteFetchError     - Single-symbol failure
    QuoteChannelError   - Upstream unreachable for the whole batch
    create_quote_provider - Factory that selects Yahoo, Massive or the simulator
"""

from .errors import QuoteChannelError, QuoteFetchError
from .factory import create_quote_provider
from .fetcher import QuoteFetcher
from .interface import QuoteProvider
from .models import Quote, QuoteResult

__all__ = [
    "Quote",
    "QuoteResult",
    "QuoteProvider",
    "QuoteFetcher",
    "QuoteFetchError",
    "QuoteChannelError",
    "create_quote_provider",
]
