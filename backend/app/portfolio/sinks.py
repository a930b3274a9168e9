"""Subscriber sinks: per-connection outboxes the hub publishes into."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import AsyncIterator
from enum import Enum

from .errors import SinkClosedError

_ids = itertools.count(1)


class SinkState(Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class QueueSink:
    """A subscriber outbox backed by a bounded asyncio.Queue.

    The hub calls ``send`` synchronously during publish; the connection's own
    task drains the queue with ``async for payload in sink`` and writes to the
    wire. A subscriber that falls ``maxsize`` payloads behind is treated as
    dead: the send raises SinkClosedError and the hub drops it.

    Lifecycle: CONNECTING --open()--> OPEN --close()--> CLOSED. Only OPEN sinks
    are ready to receive.
    """

    def __init__(self, label: str = "", maxsize: int = 4) -> None:
        self.label = label or f"sink-{next(_ids)}"
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=maxsize)
        self._state = SinkState.CONNECTING

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is SinkState.OPEN

    def open(self) -> None:
        if self._state is SinkState.CONNECTING:
            self._state = SinkState.OPEN

    def send(self, payload: str) -> None:
        if self._state is SinkState.CLOSED:
            raise SinkClosedError(f"{self.label} is closed")
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.close()
            raise SinkClosedError(f"{self.label} fell behind, backlog full") from None

    def close(self) -> None:
        """Stop accepting payloads and wake the draining task. Idempotent."""
        if self._state is SinkState.CLOSED:
            return
        self._state = SinkState.CLOSED
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)  # End-of-stream marker

    def pending(self) -> int:
        return self._queue.qsize()

    async def __aiter__(self) -> AsyncIterator[str]:
        while True:
            payload = await self._queue.get()
            if payload is None:
                return
            yield payload

    def __repr__(self) -> str:
        return f"<QueueSink {self.label} {self._state.value}>"
