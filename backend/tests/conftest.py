"""Shared fixtures for race board tests.

Provides:
- FakeClock: settable wall clock
- make_race / make_batch: RaceRecord and RaceBatch factories
- QueuedFeedClient: feed stand-in returning queued results
- GatedFeedClient: feed stand-in whose calls block until the test releases them
"""

import asyncio
from typing import Optional

import pytest

from next5racing.features.races import RaceBatch, RaceFeedClient, RaceRecord
from next5racing.shared.clock import Clock
from next5racing.shared.constants import RaceCategoryId


NOW = 1_732_200_000


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

class FakeClock(Clock):
    def __init__(self, now: int = NOW):
        self._now = now

    def now(self) -> int:
        return self._now

    def set(self, now: int):
        self._now = now

    def advance(self, seconds: int):
        self._now += seconds


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def make_race(
    race_id: str,
    start: Optional[int],
    category: str = RaceCategoryId.HORSE.value,
    meeting_name: str = "Flemington",
    race_number: Optional[int] = 1,
) -> RaceRecord:
    return RaceRecord(
        race_id=race_id,
        meeting_name=meeting_name,
        race_number=race_number,
        category_id=category,
        advertised_start=start,
        race_name=f"Race {race_id}",
    )


def make_batch(*races: RaceRecord, next_to_go_ids=None) -> RaceBatch:
    ids = next_to_go_ids if next_to_go_ids is not None else [r.race_id for r in races]
    return RaceBatch(
        races={race.race_id: race for race in races},
        next_to_go_ids=tuple(ids),
    )


# ---------------------------------------------------------------------------
# Feed clients
# ---------------------------------------------------------------------------

class QueuedFeedClient(RaceFeedClient):
    """Returns (or raises) queued results in order; the last one repeats."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def fetch_races(self) -> RaceBatch:
        self.calls += 1
        if len(self.results) > 1:
            result = self.results.pop(0)
        else:
            result = self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


class GatedFeedClient(RaceFeedClient):
    """
    Every call parks on a future in `pending` until the test resolves it.

    With ignore_cancel=True the call keeps waiting after being cancelled,
    like a client that cannot abandon its request.
    """

    def __init__(self, ignore_cancel: bool = False):
        self.ignore_cancel = ignore_cancel
        self.calls = 0
        self.ignored_cancellations = 0
        self.pending: list[asyncio.Future] = []

    async def fetch_races(self) -> RaceBatch:
        self.calls += 1
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        if not self.ignore_cancel:
            return await future
        while True:
            try:
                return await asyncio.shield(future)
            except asyncio.CancelledError:
                self.ignored_cancellations += 1


async def settle(scheduler, max_rounds: int = 100):
    """Let the event loop run until the scheduler has no fetch in flight."""
    for _ in range(max_rounds):
        if not scheduler.is_fetching:
            return
        await asyncio.sleep(0)
    raise AssertionError("fetch did not settle")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def now():
    return NOW
