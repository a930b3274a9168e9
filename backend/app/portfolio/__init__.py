"""Portfolio refresh-and-broadcast pipeline.

Public API:
    HoldingsRegistry    - Load-once sectors and holdings
    load_holdings       - Read the holdings JSON file into a registry
    compute_snapshot    - Pure valuation of holdings against quote results
    Snapshot            - Immutable valuation result, the unit of publication
    SubscriberHub       - Live sinks + atomic broadcast
    CycleScheduler      - Non-overlapping fixed-period cycle driver
    RefreshPipeline     - fetch -> compute -> publish, one cycle
    create_stream_router - FastAPI router factory for the push endpoints
"""

from .holdings import HoldingsRegistry, load_holdings
from .hub import SubscriberHub
from .models import EnrichedHolding, Holding, Sector, SectorSummary, Snapshot
from .pipeline import RefreshPipeline
from .scheduler import CycleScheduler, SchedulerState
from .stream import create_stream_router
from .valuation import compute_snapshot

__all__ = [
    "Holding",
    "Sector",
    "EnrichedHolding",
    "SectorSummary",
    "Snapshot",
    "HoldingsRegistry",
    "load_holdings",
    "compute_snapshot",
    "SubscriberHub",
    "CycleScheduler",
    "SchedulerState",
    "RefreshPipeline",
    "create_stream_router",
]
