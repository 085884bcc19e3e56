"""Data models for the next-to-go board (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Union


@dataclass(frozen=True)
class RaceRecord:
    """One upcoming race as received from the feed."""

    race_id: str
    meeting_name: str | None
    race_number: int | None  # 1-based within the meeting
    category_id: str | None
    advertised_start: int | None  # epoch seconds
    race_name: str | None = None
    meeting_id: str | None = None
    venue_name: str | None = None
    venue_state: str | None = None
    venue_country: str | None = None  # "AUS"


@dataclass(frozen=True)
class RaceBatch:
    """
    One feed response.

    `races` keeps the feed's own order; `next_to_go_ids` is the feed's
    ordering hint and may reference ids that are not in `races`.
    """

    races: dict[str, RaceRecord] = field(default_factory=dict)
    next_to_go_ids: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.races)

    def ordered_races(self) -> list[RaceRecord]:
        """Races in hint order first, then any others in feed order."""
        ordered = []
        seen = set()
        for race_id in self.next_to_go_ids:
            race = self.races.get(race_id)
            if race is not None and race_id not in seen:
                ordered.append(race)
                seen.add(race_id)
        for race_id, race in self.races.items():
            if race_id not in seen:
                ordered.append(race)
        return ordered


@dataclass(frozen=True)
class RaceCategory:
    """Category chip state: id, display name and whether it is selected."""

    id: str
    name: str
    is_selected: bool


# =============================================================================
# View State
# =============================================================================

class ViewStateKind(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class Loading:
    kind: ClassVar[ViewStateKind] = ViewStateKind.LOADING


@dataclass(frozen=True)
class Loaded:
    """Visible races, soonest first."""

    races: tuple[RaceRecord, ...]
    kind: ClassVar[ViewStateKind] = ViewStateKind.LOADED

    def __post_init__(self):
        if not self.races:
            raise ValueError("Loaded requires at least one race; use Empty")

    def __iter__(self) -> Iterator[RaceRecord]:
        return iter(self.races)

    def __len__(self) -> int:
        return len(self.races)

    @property
    def race_ids(self) -> tuple[str, ...]:
        return tuple(race.race_id for race in self.races)


@dataclass(frozen=True)
class Empty:
    kind: ClassVar[ViewStateKind] = ViewStateKind.EMPTY


@dataclass(frozen=True)
class Error:
    message: str
    kind: ClassVar[ViewStateKind] = ViewStateKind.ERROR


ViewState = Union[Loading, Loaded, Empty, Error]


def same_view(previous: ViewState, current: ViewState) -> bool:
    """
    Whether two states look the same to an observer.

    Two Loaded states count as the same when they list the same race ids
    in the same order.
    """
    if isinstance(previous, Loaded) and isinstance(current, Loaded):
        return previous.race_ids == current.race_ids
    return previous == current
