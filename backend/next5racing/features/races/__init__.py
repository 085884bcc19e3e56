"""
Next-to-go races feature.

Usage:
    from next5racing.features.races import RaceBoardService, RefreshScheduler

Components:
- RaceRepository: retained batch + expire/filter/sort/truncate
- RefreshScheduler: periodic refresh, expiry sweep, single in-flight fetch
- CountdownEngine: "2 min 5s" / "-30s" / "Race Started!" texts
- ViewStateProjector: Loading / Loaded / Empty / Error and category chips
- ViewStateStore: observable current state
- NedsRaceFeedClient: httpx client for the upstream feed
"""

from .models import (
    RaceRecord,
    RaceBatch,
    RaceCategory,
    ViewState,
    ViewStateKind,
    Loading,
    Loaded,
    Empty,
    Error,
)
from .config import RaceBoardConfig
from .categories import CategoryFilter
from .client import (
    RaceFeedClient,
    NedsRaceFeedClient,
    RaceFeedError,
    RaceFeedConnectivityError,
    RaceFeedFetchError,
    RaceFeedNetworkError,
    RaceFeedServerError,
    RaceFeedParseError,
    RaceFeedEmptyError,
)
from .connectivity import ReachabilitySignal, ConnectivityMonitor
from .countdown import CountdownEngine
from .projector import ViewStateProjector
from .repository import RaceRepository
from .store import ViewStateStore
from .scheduler import RefreshScheduler, SchedulerPhase
from .service import RaceBoardService, RaceBoardSnapshot, get_race_board

__all__ = [
    # Models
    "RaceRecord",
    "RaceBatch",
    "RaceCategory",
    "ViewState",
    "ViewStateKind",
    "Loading",
    "Loaded",
    "Empty",
    "Error",
    # Config
    "RaceBoardConfig",
    # Filter
    "CategoryFilter",
    # Client
    "RaceFeedClient",
    "NedsRaceFeedClient",
    "RaceFeedError",
    "RaceFeedConnectivityError",
    "RaceFeedFetchError",
    "RaceFeedNetworkError",
    "RaceFeedServerError",
    "RaceFeedParseError",
    "RaceFeedEmptyError",
    # Connectivity
    "ReachabilitySignal",
    "ConnectivityMonitor",
    # Engine
    "CountdownEngine",
    "ViewStateProjector",
    "RaceRepository",
    "ViewStateStore",
    "RefreshScheduler",
    "SchedulerPhase",
    # Service
    "RaceBoardService",
    "RaceBoardSnapshot",
    "get_race_board",
]
