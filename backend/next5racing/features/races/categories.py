"""
Category filter.

Keeps the user's selected categories in the order they were picked.
Order only matters for display; matching and equality ignore it.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional


def _as_id(category_id) -> str:
    """Accept RaceCategoryId members as well as raw id strings."""
    if isinstance(category_id, Enum):
        return category_id.value
    return category_id


class CategoryFilter:
    """
    Insertion-ordered set of selected category ids.

    An empty filter means "show every category".

    Usage:
        category_filter = CategoryFilter()
        category_filter.toggle(RaceCategoryId.HORSE)
        category_filter.matches(race.category_id)
    """

    __hash__ = None  # mutable

    def __init__(self, category_ids: Iterable[str] = ()):
        self._ids: list[str] = []
        self.replace(category_ids)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    @property
    def is_empty(self) -> bool:
        return not self._ids

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CategoryFilter):
            return set(self._ids) == set(other._ids)
        return NotImplemented

    def __repr__(self) -> str:
        return f"CategoryFilter({self._ids!r})"

    def matches(self, category_id: Optional[str]) -> bool:
        """Whether a race with this category passes the filter."""
        if not self._ids:
            return True
        return category_id in self._ids

    def toggle(self, category_id: str) -> bool:
        """
        Flip membership of a category.

        Returns:
            True if the category is selected after the toggle
        """
        category_id = _as_id(category_id)
        if category_id in self._ids:
            self._ids.remove(category_id)
            return False
        self._ids.append(category_id)
        return True

    def replace(self, category_ids: Iterable[str]):
        """Replace the selection, dropping duplicates but keeping order."""
        ids: list[str] = []
        for category_id in category_ids:
            category_id = _as_id(category_id)
            if category_id not in ids:
                ids.append(category_id)
        self._ids = ids

    def clear(self):
        self._ids = []

    def copy(self) -> "CategoryFilter":
        return CategoryFilter(self._ids)
