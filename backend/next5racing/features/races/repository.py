"""
Race repository.

Holds the last fetched race batch and derives the visible "next to go"
list from it: expire, filter, sort, truncate.

Usage:
    repository = RaceRepository()
    repository.replace(batch)
    state = repository.apply(batch.ordered_races(), category_filter, now)
"""

import logging
from typing import Optional, Sequence

from .categories import CategoryFilter
from .config import RaceBoardConfig
from .models import Empty, Loaded, RaceBatch, RaceRecord, ViewState

logger = logging.getLogger(__name__)


class RaceRepository:
    """
    Last accepted race batch plus the pure list-building rules.

    `apply` has no side effects; the retained batch only changes through
    `replace` and `clear`.
    """

    def __init__(
        self,
        limit: int = RaceBoardConfig.RACE_LIST_LIMIT,
        expiry_threshold: int = RaceBoardConfig.EXPIRY_THRESHOLD_SECONDS,
    ):
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        self.limit = limit
        self.expiry_threshold = expiry_threshold
        self._batch: Optional[RaceBatch] = None

    # -------------------------------------------------------------------------
    # Retained batch
    # -------------------------------------------------------------------------

    @property
    def last_batch(self) -> Optional[RaceBatch]:
        return self._batch

    def replace(self, batch: RaceBatch):
        """Swap in a freshly fetched batch wholesale."""
        self._batch = batch
        logger.debug(f"Retained race batch replaced: {len(batch)} races")

    def clear(self):
        self._batch = None

    # -------------------------------------------------------------------------
    # List building
    # -------------------------------------------------------------------------

    def is_expired(self, race: RaceRecord, now: int) -> bool:
        """A race expires once it is strictly more than the threshold past its start."""
        if race.advertised_start is None:
            return False
        return now - race.advertised_start > self.expiry_threshold

    def apply(
        self,
        races: Sequence[RaceRecord],
        category_filter: CategoryFilter,
        now: int,
    ) -> ViewState:
        """
        Build the visible list from raw races.

        Args:
            races: Races in feed order (ties keep this order)
            category_filter: Selected categories, empty for all
            now: Current time in epoch seconds

        Returns:
            Loaded with at most `limit` races soonest first, or Empty
        """
        eligible = [
            race for race in races
            if race.advertised_start is not None
            and not self.is_expired(race, now)
            and category_filter.matches(race.category_id)
        ]

        # list.sort is stable, so equal start times keep feed order
        eligible.sort(key=lambda race: race.advertised_start)
        visible = eligible[:self.limit]

        if not visible:
            return Empty()
        return Loaded(tuple(visible))

    def apply_retained(
        self,
        category_filter: CategoryFilter,
        now: int,
    ) -> Optional[ViewState]:
        """Re-run `apply` on the retained batch; None if nothing was fetched yet."""
        if self._batch is None:
            return None
        return self.apply(self._batch.ordered_races(), category_filter, now)
