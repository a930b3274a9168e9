"""Thread-safe set of live subscriber sinks with atomic broadcast."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Protocol

from .errors import SinkClosedError
from .models import Snapshot

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Anything the hub can publish to."""

    @property
    def ready(self) -> bool: ...

    def send(self, payload: str) -> None: ...


class SubscriberHub:
    """Owns the live sinks and broadcasts each Snapshot to all of them.

    Writers: the transport layer (register/unregister on connect/disconnect).
    Readers: the refresh pipeline (publish once per cycle).

    A snapshot is serialized exactly once per publish, so every sink in a
    cycle receives the same bytes. The last published snapshot is kept for
    HTTP readers; it is not replayed to sinks that connect later.
    """

    def __init__(self) -> None:
        self._sinks: set[Sink] = set()
        self._lock = Lock()
        self._latest: Snapshot | None = None
        self._published: int = 0  # Number of publish() calls so far

    def register(self, sink: Sink) -> None:
        with self._lock:
            self._sinks.add(sink)
            count = len(self._sinks)
        logger.info("Subscriber registered: %r (%d live)", sink, count)

    def unregister(self, sink: Sink) -> None:
        """Remove a sink. No-op if it is not registered."""
        with self._lock:
            if sink not in self._sinks:
                return
            self._sinks.discard(sink)
            count = len(self._sinks)
        logger.info("Subscriber unregistered: %r (%d live)", sink, count)

    def publish(self, snapshot: Snapshot) -> int:
        """Send ``snapshot`` to every ready sink. Returns the number delivered.

        Sinks that are not ready are skipped for this cycle and kept. Sinks
        whose send fails are removed.
        """
        payload = snapshot.to_json()
        with self._lock:
            sinks = list(self._sinks)
            self._latest = snapshot
            self._published += 1

        delivered = 0
        dead: list[Sink] = []
        for sink in sinks:
            if not sink.ready:
                continue
            try:
                sink.send(payload)
                delivered += 1
            except (SinkClosedError, OSError, RuntimeError) as e:
                logger.warning("Dropping subscriber %r: %s", sink, e)
                dead.append(sink)

        if dead:
            with self._lock:
                self._sinks.difference_update(dead)
        return delivered

    @property
    def latest(self) -> Snapshot | None:
        """The last published Snapshot, or None before the first cycle."""
        return self._latest

    @property
    def published(self) -> int:
        return self._published

    def __len__(self) -> int:
        with self._lock:
            return len(self._sinks)

    def __contains__(self, sink: object) -> bool:
        with self._lock:
            return sink in self._sinks
