"""Portfolio pipeline error types."""

from __future__ import annotations


class HoldingsConfigError(ValueError):
    """The holdings file is missing, unreadable or malformed."""


class SinkClosedError(Exception):
    """A subscriber sink can no longer receive publications."""
