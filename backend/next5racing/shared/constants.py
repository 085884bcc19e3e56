"""
Racing category constants.

Single source of truth for the closed set of race categories the board
knows about. Ids are the upstream feed's category ids.
"""

from enum import Enum


class RaceCategoryId(str, Enum):
    """
    Category ids used by the racing feed.

    The feed tags every race summary with one of these.
    """
    HORSE = "4a2788f8-e825-4d36-9894-efd4baf1cfae"
    HARNESS = "161d9be2-e909-4326-8c2c-35ed71fb460b"
    GREYHOUND = "9daef0d7-bf3c-4f50-921d-8e818c60fe61"


# Display names, in the order categories are presented
CATEGORY_DISPLAY_NAMES: dict[RaceCategoryId, str] = {
    RaceCategoryId.HORSE: "Horse",
    RaceCategoryId.HARNESS: "Harness",
    RaceCategoryId.GREYHOUND: "Greyhound",
}

KNOWN_CATEGORY_IDS: frozenset[str] = frozenset(c.value for c in RaceCategoryId)


def is_known_category(category_id: str) -> bool:
    """Check whether a category id belongs to the closed set."""
    return category_id in KNOWN_CATEGORY_IDS
