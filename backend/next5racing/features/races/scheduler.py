"""
Refresh scheduler.

Owns "when do we ask the feed for data" and "is a fetch outstanding".

Triggers:
- Periodic refresh timer (default every 60s)
- Explicit refresh: manual pull, retry, category filter change
- Expiry sweep: every tick, if a visible race has aged off the board,
  refresh immediately instead of just shrinking the list

Rules:
- At most one fetch in flight; starting a fetch cancels the previous one
- Every fetch carries a generation number; a result from an older
  generation is dropped even if the client ignored cancellation
- Offline: Error("No internet connection.") without calling the feed
- Cancellation is never surfaced as an error

All state writes go through `_commit`, and everything runs on one event
loop, so timer callbacks and user triggers never interleave mid-update.
"""

import asyncio
import logging
from enum import Enum
from typing import Iterable, Optional

from next5racing.shared.clock import Clock, PeriodicTask, system_clock

from .categories import CategoryFilter
from .client import RaceFeedClient, RaceFeedConnectivityError
from .config import RaceBoardConfig
from .connectivity import ReachabilitySignal
from .countdown import CountdownEngine
from .models import Error, Loaded, Loading, RaceCategory, ViewState
from .projector import ViewStateProjector
from .repository import RaceRepository
from .store import ViewStateStore

logger = logging.getLogger(__name__)


class SchedulerPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    IDLE_WITH_ERROR = "idle_with_error"


class RefreshScheduler:
    """
    Coordinates periodic refresh, the expiry sweep and on-demand refreshes.

    Call `start()` to begin the timers (and an initial fetch).
    Call `stop()` to cancel the timers and any in-flight fetch together.

    Usage:
        scheduler = RefreshScheduler(NedsRaceFeedClient(), reachability)
        await scheduler.start()
        scheduler.toggle_category(RaceCategoryId.HORSE)
        # ... later ...
        await scheduler.stop()
    """

    def __init__(
        self,
        feed_client: RaceFeedClient,
        reachability: Optional[ReachabilitySignal] = None,
        store: Optional[ViewStateStore] = None,
        repository: Optional[RaceRepository] = None,
        countdown: Optional[CountdownEngine] = None,
        clock: Optional[Clock] = None,
        category_filter: Optional[CategoryFilter] = None,
        refresh_interval: float = RaceBoardConfig.REFRESH_INTERVAL_SECONDS,
        tick_interval: float = RaceBoardConfig.TICK_INTERVAL_SECONDS,
        stop_timeout: float = RaceBoardConfig.STOP_TIMEOUT_SECONDS,
    ):
        self.feed_client = feed_client
        self.reachability = reachability if reachability is not None else ReachabilitySignal()
        self.store = store if store is not None else ViewStateStore()
        self.repository = repository if repository is not None else RaceRepository()
        self.projector = ViewStateProjector(self.repository)
        self.countdown = countdown if countdown is not None else CountdownEngine()
        self.clock = clock if clock is not None else system_clock
        self.category_filter = (
            category_filter if category_filter is not None else CategoryFilter()
        )

        self._refresh_timer = PeriodicTask(
            refresh_interval, self._on_refresh_timer, name="race-refresh"
        )
        self._tick_timer = PeriodicTask(tick_interval, self.tick, name="race-tick")
        self.stop_timeout = stop_timeout

        self._generation = 0
        self._fetch_task: Optional[asyncio.Task] = None
        self._phase = SchedulerPhase.IDLE
        self._running = False
        self._closed = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self):
        """Start both timers and fetch right away."""
        if self._running:
            return

        self._running = True
        self._closed = False
        self._refresh_timer.start()
        self._tick_timer.start()
        self.request_refresh("startup")
        logger.info(
            f"Race refresh scheduler started "
            f"(refresh every {self._refresh_timer.interval}s, "
            f"tick every {self._tick_timer.interval}s)"
        )

    async def stop(self):
        """
        Cancel timers and the in-flight fetch; nothing is applied afterwards.

        A fetch that ignores cancellation is waited on for at most
        `stop_timeout` seconds, then left to finish on its own.
        """
        self._running = False
        self._closed = True
        self._generation += 1

        await self._refresh_timer.stop()
        await self._tick_timer.stop()

        task, self._fetch_task = self._fetch_task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task}, timeout=self.stop_timeout)
            if not task.done():
                logger.debug(
                    f"Race fetch still running {self.stop_timeout}s after cancel, "
                    "its result will be discarded"
                )

        self._phase = SchedulerPhase.IDLE
        logger.info("Race refresh scheduler stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def phase(self) -> SchedulerPhase:
        return self._phase

    @property
    def is_fetching(self) -> bool:
        return self._fetch_task is not None and not self._fetch_task.done()

    # =========================================================================
    # Refresh
    # =========================================================================

    def request_refresh(self, reason: str = "manual") -> Optional[asyncio.Task]:
        """
        Start a fetch now, cancelling any fetch already in flight.

        Returns:
            The fetch task, or None once the scheduler has been stopped
        """
        if self._closed:
            logger.debug(f"Refresh ({reason}) ignored: scheduler stopped")
            return None

        previous = self._fetch_task
        if previous is not None and not previous.done():
            logger.debug(f"Cancelling in-flight fetch for new refresh ({reason})")
            previous.cancel()

        self._generation += 1
        generation = self._generation
        self._phase = SchedulerPhase.FETCHING

        task = asyncio.create_task(
            self._run_fetch(generation, reason),
            name=f"race-fetch-{generation}",
        )
        self._fetch_task = task
        task.add_done_callback(self._on_fetch_done)
        return task

    async def refresh(self, reason: str = "manual") -> ViewState:
        """Request a refresh and wait until it settles or is superseded."""
        task = self.request_refresh(reason)
        if task is not None:
            await asyncio.wait({task})
        return self.store.state

    async def _run_fetch(self, generation: int, reason: str):
        """Fetch one batch and commit the outcome if still current."""
        logger.debug(f"Refreshing races ({reason}), generation {generation}")

        if not self.reachability.is_connected:
            logger.warning("Race refresh skipped: no network connection")
            self._finish(
                self.projector.project_failure(RaceFeedConnectivityError()),
                generation,
            )
            return

        # Keep showing the current list while refreshing it
        if not isinstance(self.store.state, Loaded):
            self._commit(Loading(), generation)

        try:
            batch = await self.feed_client.fetch_races()
        except asyncio.CancelledError:
            logger.debug(f"Race fetch generation {generation} cancelled")
            raise
        except Exception as e:
            if self._is_stale(generation):
                logger.debug(f"Ignoring failure of stale fetch {generation}: {e}")
                return
            logger.error(f"Race fetch failed: {e}")
            self._finish(self.projector.project_failure(e), generation)
            return

        if self._is_stale(generation):
            logger.debug(f"Discarding stale race batch from generation {generation}")
            return

        now = self.clock.now()
        self.repository.replace(batch)
        state = self.projector.project_batch(batch, self.category_filter, now)
        self._finish(state, generation, now)

    def _on_fetch_done(self, task: asyncio.Task):
        if self._fetch_task is task:
            self._fetch_task = None
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Race fetch task crashed: {error}")

    def _on_refresh_timer(self):
        self.request_refresh("timer")

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    # =========================================================================
    # Commit point
    # =========================================================================

    def _finish(self, state: ViewState, generation: int, now: Optional[int] = None):
        """Commit a fetch's final state and settle the phase."""
        if self._commit(state, generation, now):
            if isinstance(state, Error):
                self._phase = SchedulerPhase.IDLE_WITH_ERROR
            else:
                self._phase = SchedulerPhase.IDLE

    def _commit(self, state: ViewState, generation: int, now: Optional[int] = None) -> bool:
        """
        Single write path for view state and countdowns.

        Countdowns are published first so state listeners already see the
        texts for the races they are told about.
        """
        if self._is_stale(generation):
            return False

        if isinstance(state, Loaded):
            if now is None:
                now = self.clock.now()
            self.store.set_countdowns(self.countdown.render_all(state.races, now))
        else:
            self.store.set_countdowns({})
        self.store.set_state(state)
        return True

    # =========================================================================
    # Tick: countdowns + expiry sweep
    # =========================================================================

    def tick(self):
        """
        Recompute countdowns and sweep for expired races.

        Runs every tick interval. If re-applying the retained batch at the
        current time drops any visible race, a refresh is started (unless
        one is already in flight).
        """
        if self._closed:
            return

        state = self.store.state
        if not isinstance(state, Loaded):
            return

        now = self.clock.now()
        self.store.set_countdowns(self.countdown.render_all(state.races, now))

        if self.is_fetching:
            return

        recomputed = self.repository.apply_retained(self.category_filter, now)
        if recomputed is None:
            return

        still_visible = set(recomputed.race_ids) if isinstance(recomputed, Loaded) else set()
        dropped = [race_id for race_id in state.race_ids if race_id not in still_visible]
        if dropped:
            logger.info(f"{len(dropped)} race(s) aged off the board, refreshing")
            self.request_refresh("expiry")

    # =========================================================================
    # Category control
    # =========================================================================

    @property
    def categories(self) -> list[RaceCategory]:
        return self.projector.categories(self.category_filter)

    def toggle_category(self, category_id: str) -> bool:
        """Flip a category and refresh. Returns True if now selected."""
        selected = self.category_filter.toggle(category_id)
        logger.info(f"Category {category_id} {'selected' if selected else 'deselected'}")
        self.request_refresh("category-toggle")
        return selected

    def set_filters(self, category_ids: Iterable[str]):
        """Replace the selected categories and refresh."""
        self.category_filter.replace(category_ids)
        self.request_refresh("category-set")

    def clear_filters(self):
        """Show every category again and refresh."""
        self.category_filter.clear()
        self.request_refresh("category-clear")
