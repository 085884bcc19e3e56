"""
Formatting utilities for display.

Used by the countdown engine and the HTTP API.
"""

from typing import Optional

SECONDS_IN_MINUTE = 60


def format_countdown(remaining_seconds: Optional[int]) -> str:
    """
    Format time remaining until a race jumps.

    Args:
        remaining_seconds: Advertised start minus now, in seconds
                           (negative once the race has started), or None
                           when the start time is unknown

    Returns:
        '2 min 5s' before the start, '-30s' during the first minute after
        it, 'Race Started!' from then on, 'Time unknown' without a start
    """
    if remaining_seconds is None:
        return "Time unknown"

    if remaining_seconds > 0:
        minutes = remaining_seconds // SECONDS_IN_MINUTE
        seconds = remaining_seconds % SECONDS_IN_MINUTE
        return f"{minutes} min {seconds}s"

    elapsed = abs(remaining_seconds)
    if elapsed < SECONDS_IN_MINUTE:
        return f"-{elapsed}s"
    return "Race Started!"


def format_race_number(race_number: Optional[int]) -> str:
    """Race number for display, 'Unknown' if the feed omitted it."""
    if race_number is None:
        return "Unknown"
    return str(race_number)
