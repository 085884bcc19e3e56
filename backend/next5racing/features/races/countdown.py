"""Countdown text for visible races."""

from typing import Iterable, Optional

from next5racing.shared.formatters import format_countdown, format_race_number

from .models import RaceRecord


class CountdownEngine:
    """
    Derives "time to jump" text from a race's start and the current time.

    Stateless: callers pass `now` on every tick.
    """

    def render(self, advertised_start: Optional[int], now: int) -> str:
        if advertised_start is None:
            return format_countdown(None)
        return format_countdown(advertised_start - now)

    def render_all(self, races: Iterable[RaceRecord], now: int) -> dict[str, str]:
        """Countdown text keyed by race id."""
        return {
            race.race_id: self.render(race.advertised_start, now)
            for race in races
        }

    def accessibility_label(self, race: RaceRecord, now: int) -> str:
        """Spoken description, e.g. 'Race 3 at Flemington, starting in 2 min 5s'."""
        location = race.meeting_name or "Unknown location"
        race_number = format_race_number(race.race_number)
        countdown = self.render(race.advertised_start, now)
        return f"Race {race_number} at {location}, starting in {countdown}"
