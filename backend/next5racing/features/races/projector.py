"""
ViewState projector.

Turns refresh outcomes into one of the four view states and exposes the
category chips derived from the current filter.
"""

from next5racing.shared.constants import CATEGORY_DISPLAY_NAMES

from .categories import CategoryFilter
from .client import RaceFeedEmptyError, RaceFeedError
from .models import Empty, Error, RaceBatch, RaceCategory, ViewState
from .repository import RaceRepository


class ViewStateProjector:
    """Maps fetch results and failures onto ViewState."""

    def __init__(self, repository: RaceRepository):
        self.repository = repository

    def project_batch(
        self,
        batch: RaceBatch,
        category_filter: CategoryFilter,
        now: int,
    ) -> ViewState:
        return self.repository.apply(batch.ordered_races(), category_filter, now)

    def project_failure(self, error: Exception) -> ViewState:
        """
        Map a failed refresh to a state.

        No race data is Empty, not an error. Feed errors carry their own
        human-readable message.
        """
        if isinstance(error, RaceFeedEmptyError):
            return Empty()
        if isinstance(error, RaceFeedError):
            return Error(str(error))
        return Error(f"Unexpected error: {error}")

    def categories(self, category_filter: CategoryFilter) -> list[RaceCategory]:
        """The closed category set with selection flags from the filter."""
        return [
            RaceCategory(
                id=category_id.value,
                name=name,
                is_selected=category_id.value in category_filter,
            )
            for category_id, name in CATEGORY_DISPLAY_NAMES.items()
        ]
