"""Fixed-period cycle scheduler that never overlaps cycles."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from enum import Enum

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"  # No cycle in flight
    RUNNING = "running"  # A cycle is in flight


async def interval_ticks(interval: float) -> AsyncIterator[None]:
    """Yield once every ``interval`` seconds, forever."""
    while True:
        await asyncio.sleep(interval)
        yield


class CycleScheduler:
    """Drives ``cycle`` once per tick, dropping ticks that arrive mid-cycle.

    State machine:

        IDLE    --tick--> RUNNING   (cycle task started)
        RUNNING --tick--> RUNNING   (tick dropped with a warning, not queued)
        RUNNING --cycle done/failed--> IDLE

    ``start()`` fires one tick immediately, then one per item of ``ticks``
    (default: every ``interval`` seconds). Tests inject their own async
    iterable to control time. Exceptions raised by the cycle are logged and
    never escape the scheduler.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[object]],
        interval: float = 15.0,
        ticks: AsyncIterable[None] | None = None,
    ) -> None:
        self._cycle = cycle
        self._interval = interval
        self._ticks = ticks
        self._state = SchedulerState.IDLE
        self._cycle_task: asyncio.Task | None = None
        self._tick_task: asyncio.Task | None = None
        self.cycles_started = 0
        self.ticks_dropped = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval(self) -> float:
        return self._interval

    def tick(self) -> bool:
        """Start a cycle if idle. Returns False when the tick was dropped."""
        if self._state is SchedulerState.RUNNING:
            self.ticks_dropped += 1
            logger.warning(
                "Refresh cycle %d still running, skipping this tick (%d skipped so far)",
                self.cycles_started,
                self.ticks_dropped,
            )
            return False

        self._state = SchedulerState.RUNNING
        self.cycles_started += 1
        self._cycle_task = asyncio.create_task(
            self._run_cycle(), name=f"refresh-cycle-{self.cycles_started}"
        )
        return True

    async def start(self) -> None:
        """Fire the first cycle now and begin consuming ticks. Call once."""
        if self._tick_task is not None:
            return
        ticks = self._ticks if self._ticks is not None else interval_ticks(self._interval)
        self.tick()
        self._tick_task = asyncio.create_task(self._tick_loop(ticks), name="refresh-scheduler")
        logger.info("Refresh scheduler started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        """Cancel the tick loop and any in-flight cycle. Safe to call multiple times."""
        for task in (self._tick_task, self._cycle_task):
            if task and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        if self._tick_task is not None:
            logger.info("Refresh scheduler stopped after %d cycles", self.cycles_started)
        self._tick_task = None
        self._cycle_task = None
        self._state = SchedulerState.IDLE

    async def wait_idle(self) -> None:
        """Wait until the in-flight cycle (if any) has finished."""
        task = self._cycle_task
        if task is not None and not task.done():
            await asyncio.wait({task})

    # --- Internal ---

    async def _tick_loop(self, ticks: AsyncIterable[None]) -> None:
        async for _ in ticks:
            self.tick()

    async def _run_cycle(self) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            await self._cycle()
        except Exception:
            logger.exception("Refresh cycle %d failed", self.cycles_started)
        finally:
            self._state = SchedulerState.IDLE
        logger.debug("Refresh cycle %d took %.2fs", self.cycles_started, loop.time() - started)
