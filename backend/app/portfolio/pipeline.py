"""One refresh cycle: fetch quotes, value the portfolio, publish the snapshot."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ..market.errors import QuoteChannelError
from ..market.fetcher import QuoteFetcher
from .holdings import HoldingsRegistry
from .hub import SubscriberHub
from .models import Snapshot
from .valuation import compute_snapshot

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshPipeline:
    """The body of a cycle, handed to CycleScheduler as its callable.

    Failures are contained here: a single symbol failing degrades that
    holding, the whole provider being unreachable skips the cycle (nothing is
    published, subscribers keep their previous snapshot).
    """

    def __init__(
        self,
        registry: HoldingsRegistry,
        fetcher: QuoteFetcher,
        hub: SubscriberHub,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._registry = registry
        self._fetcher = fetcher
        self._hub = hub
        self._clock = clock

    async def run_once(self) -> Snapshot | None:
        """Run one cycle. Returns the published Snapshot, or None if skipped."""
        symbols = self._registry.all_symbols()
        logger.debug("Fetching %d symbols: %s", len(symbols), sorted(symbols))

        try:
            results = await self._fetcher.fetch(symbols)
        except QuoteChannelError as e:
            logger.error("Quote provider unreachable, skipping this cycle: %s", e)
            return None

        snapshot = compute_snapshot(self._registry.all_sectors(), results, as_of=self._clock())
        delivered = self._hub.publish(snapshot)

        failed = sum(1 for r in results.values() if not r.ok)
        logger.info(
            "Broadcast snapshot to %d subscribers: value %.2f / invested %.2f (%d/%d quotes failed)",
            delivered,
            snapshot.total_value,
            snapshot.total_investment,
            failed,
            len(results),
        )
        return snapshot

    async def __call__(self) -> None:
        await self.run_once()
