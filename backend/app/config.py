"""Runtime settings read from environment variables at startup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOLDINGS_FILE = Path(__file__).parent / "data" / "portfolio_holdings.json"
DEFAULT_REFRESH_INTERVAL = 15.0
DEFAULT_QUOTE_TIMEOUT = 10.0
DEFAULT_SINK_QUEUE_SIZE = 4


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide configuration. Not reloadable while running."""

    holdings_file: Path = DEFAULT_HOLDINGS_FILE
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL  # Seconds between refresh cycles
    quote_provider: str = "yahoo"  # yahoo | massive | simulator
    massive_api_key: str = ""
    quote_timeout: float | None = DEFAULT_QUOTE_TIMEOUT  # Per-symbol; None waits forever
    sink_queue_size: int = DEFAULT_SINK_QUEUE_SIZE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``env`` (defaults to ``os.environ``).

        - REFRESH_INTERVAL_SECONDS must be positive
        - QUOTE_TIMEOUT_SECONDS <= 0 disables the per-symbol timeout
        """
        env = os.environ if env is None else env

        interval = _float(env, "REFRESH_INTERVAL_SECONDS", DEFAULT_REFRESH_INTERVAL)
        if interval <= 0:
            raise ValueError(f"REFRESH_INTERVAL_SECONDS must be positive, got {interval}")

        timeout: float | None = _float(env, "QUOTE_TIMEOUT_SECONDS", DEFAULT_QUOTE_TIMEOUT)
        if timeout is not None and timeout <= 0:
            timeout = None

        queue_size = int(_float(env, "SINK_QUEUE_SIZE", DEFAULT_SINK_QUEUE_SIZE))
        if queue_size < 1:
            raise ValueError(f"SINK_QUEUE_SIZE must be at least 1, got {queue_size}")

        holdings = env.get("HOLDINGS_FILE", "").strip()
        return cls(
            holdings_file=Path(holdings) if holdings else DEFAULT_HOLDINGS_FILE,
            refresh_interval=interval,
            quote_provider=env.get("QUOTE_PROVIDER", "").strip().lower() or "yahoo",
            massive_api_key=env.get("MASSIVE_API_KEY", "").strip(),
            quote_timeout=timeout,
            sink_queue_size=queue_size,
            log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
        )
