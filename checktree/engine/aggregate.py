"""
Read-only progress counting over a content forest.
"""

from dataclasses import dataclass

from ..models import CheckableItem, Forest


@dataclass(frozen=True)
class Progress:
    """
    Number of checkable items under a forest and how many are completed.
    """
    total: int = 0
    completed: int = 0

    @property
    def percent(self) -> int:
        """Completed share as a whole percentage (0 for an empty forest)."""
        if not self.total:
            return 0
        return round(self.completed * 100 / self.total)

    def __add__(self, other: "Progress") -> "Progress":
        return Progress(self.total + other.total, self.completed + other.completed)


def count_progress(forest: Forest) -> Progress:
    """
    Count checkable items, including nested ones, and the completed ones.

    Notes are ignored.
    """
    progress = Progress()
    for block in forest:
        if isinstance(block, CheckableItem):
            progress += Progress(1, 1 if block.completed else 0)
            progress += count_progress(block.children)
    return progress


def count_all(forest: Forest) -> int:
    """Count every block in the forest, notes and descendants included."""
    total = 0
    for block in forest:
        total += 1
        if isinstance(block, CheckableItem):
            total += count_all(block.children)
    return total
