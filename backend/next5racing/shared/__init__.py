"""
Shared utilities (NOT business logic).

Usage:
    from next5racing.shared import Clock, PeriodicTask
    from next5racing.shared.formatters import format_countdown
"""
from .clock import (
    Clock,
    PeriodicTask,
    system_clock,
)
from .formatters import (
    format_countdown,
    format_race_number,
)
from .constants import (
    RaceCategoryId,
    CATEGORY_DISPLAY_NAMES,
    KNOWN_CATEGORY_IDS,
    is_known_category,
)

__all__ = [
    # Clock
    "Clock",
    "PeriodicTask",
    "system_clock",
    # Formatters
    "format_countdown",
    "format_race_number",
    # Constants
    "RaceCategoryId",
    "CATEGORY_DISPLAY_NAMES",
    "KNOWN_CATEGORY_IDS",
    "is_known_category",
]
