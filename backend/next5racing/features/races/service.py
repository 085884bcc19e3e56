"""
Race board service.

Wires the feed client, connectivity monitor and refresh scheduler into one
object with a start/stop lifecycle, and provides the process-wide instance
used by the API.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from next5racing.config import Settings, settings as default_settings

from .client import NedsRaceFeedClient
from .connectivity import ConnectivityMonitor, ReachabilitySignal
from .models import RaceCategory, ViewState
from .scheduler import RefreshScheduler, SchedulerPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RaceBoardSnapshot:
    """Everything a presenter needs at one instant."""

    state: ViewState
    countdowns: dict[str, str]
    categories: list[RaceCategory]
    phase: SchedulerPhase


class RaceBoardService:
    """
    Next-to-go board session.

    Usage:
        board = RaceBoardService.from_settings(settings)
        await board.start()
        snapshot = board.snapshot()
        await board.stop()
    """

    def __init__(
        self,
        scheduler: RefreshScheduler,
        monitor: Optional[ConnectivityMonitor] = None,
    ):
        self.scheduler = scheduler
        self.monitor = monitor

    @classmethod
    def from_settings(cls, settings: Settings) -> "RaceBoardService":
        """Build a board talking to the real feed."""
        feed_client = NedsRaceFeedClient(
            base_url=settings.feed_base_url,
            race_count=settings.feed_race_count,
            timeout=settings.feed_timeout_seconds,
        )

        monitor = None
        if settings.connectivity_probe_enabled:
            monitor = ConnectivityMonitor(
                settings.connectivity_probe_url,
                interval=settings.connectivity_check_interval_seconds,
            )
            reachability = monitor
        else:
            reachability = ReachabilitySignal(connected=True)

        scheduler = RefreshScheduler(
            feed_client,
            reachability=reachability,
            refresh_interval=settings.refresh_interval_seconds,
            tick_interval=settings.tick_interval_seconds,
        )
        return cls(scheduler, monitor=monitor)

    async def start(self):
        if self.monitor is not None:
            await self.monitor.start()
        await self.scheduler.start()
        logger.info("Race board started")

    async def stop(self):
        await self.scheduler.stop()
        if self.monitor is not None:
            await self.monitor.stop()
        logger.info("Race board stopped")

    def snapshot(self) -> RaceBoardSnapshot:
        return RaceBoardSnapshot(
            state=self.scheduler.store.state,
            countdowns=self.scheduler.store.countdowns,
            categories=self.scheduler.categories,
            phase=self.scheduler.phase,
        )


# Module-level singleton
_race_board: Optional[RaceBoardService] = None


def get_race_board() -> RaceBoardService:
    """Get or create the process-wide RaceBoardService."""
    global _race_board
    if _race_board is None:
        _race_board = RaceBoardService.from_settings(default_settings)
    return _race_board
