"""Pure structural operations over a task's content forest."""

from .locate import transform_node, remove_node, extract_node, find_node, node_path
from .cascade import toggle_cascade, toggle_with_signal, set_all_completed
from .relocate import relocate_node, Position, MissingTargetPolicy
from .aggregate import count_progress, count_all, Progress

__all__ = [
    "transform_node",
    "remove_node",
    "extract_node",
    "find_node",
    "node_path",
    "toggle_cascade",
    "toggle_with_signal",
    "set_all_completed",
    "relocate_node",
    "Position",
    "MissingTargetPolicy",
    "count_progress",
    "count_all",
    "Progress"
]
