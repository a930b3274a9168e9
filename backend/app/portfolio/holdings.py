"""Load-once, read-only registry of sectors and holdings."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .errors import HoldingsConfigError
from .models import Holding, Sector

logger = logging.getLogger(__name__)


class HoldingsRegistry:
    """The portfolio's fixed sector/holding layout.

    Built once at startup and never mutated; every refresh cycle reads it.
    """

    def __init__(self, sectors: Iterable[Sector]) -> None:
        self._sectors: tuple[Sector, ...] = tuple(sectors)
        self._symbols: frozenset[str] = frozenset(
            h.symbol for s in self._sectors for h in s.holdings
        )

    def all_sectors(self) -> tuple[Sector, ...]:
        """Sectors in configuration order."""
        return self._sectors

    def all_symbols(self) -> frozenset[str]:
        """Distinct symbols across all sectors. A symbol held twice appears once."""
        return self._symbols

    def all_holdings(self) -> list[Holding]:
        return [h for s in self._sectors for h in s.holdings]

    def __len__(self) -> int:
        return sum(len(s.holdings) for s in self._sectors)


def _non_negative(entry: dict[str, Any], key: str, where: str) -> float:
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HoldingsConfigError(f"{where}: '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise HoldingsConfigError(f"{where}: '{key}' must be finite, got {value}")
    if value < 0:
        raise HoldingsConfigError(f"{where}: '{key}' must be >= 0, got {value}")
    return float(value)


def parse_holdings(data: Any) -> HoldingsRegistry:
    """Build a registry from decoded JSON.

    Expected layout::

        [{"sector": "Technology",
          "holdings": [{"symbol": "AAPL", "quantity": 10, "purchasePrice": 150.0}]}]
    """
    if not isinstance(data, list):
        raise HoldingsConfigError("holdings root must be a list of sectors")

    sectors: list[Sector] = []
    for i, raw_sector in enumerate(data):
        if not isinstance(raw_sector, dict):
            raise HoldingsConfigError(f"sector #{i} must be an object")
        name = str(raw_sector.get("sector") or "").strip()
        if not name:
            raise HoldingsConfigError(f"sector #{i} has no name")
        raw_holdings = raw_sector.get("holdings", [])
        if not isinstance(raw_holdings, list):
            raise HoldingsConfigError(f"sector {name!r}: 'holdings' must be a list")

        holdings: list[Holding] = []
        for j, entry in enumerate(raw_holdings):
            where = f"sector {name!r} holding #{j}"
            if not isinstance(entry, dict):
                raise HoldingsConfigError(f"{where} must be an object")
            symbol = str(entry.get("symbol") or "").strip().upper()
            if not symbol:
                raise HoldingsConfigError(f"{where} has no symbol")
            holdings.append(
                Holding(
                    symbol=symbol,
                    sector=name,
                    quantity=_non_negative(entry, "quantity", where),
                    purchase_price=_non_negative(entry, "purchasePrice", where),
                )
            )
        sectors.append(Sector(name=name, holdings=tuple(holdings)))

    return HoldingsRegistry(sectors)


def load_holdings(path: str | Path) -> HoldingsRegistry:
    """Read and validate the holdings JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise HoldingsConfigError(f"cannot read holdings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise HoldingsConfigError(f"holdings file {path} is not valid JSON: {e}") from e

    registry = parse_holdings(data)
    logger.info(
        "Loaded %d holdings (%d symbols) in %d sectors from %s",
        len(registry),
        len(registry.all_symbols()),
        len(registry.all_sectors()),
        path,
    )
    return registry
