"""
Relocation of a block, with its whole subtree, to a new place in the forest.

A move is a remove followed by a reinsert beside a target block at whatever
depth the target sits, so one call can move a block into, out of, or across
subtrees. Moving to the end always reparents the block to the top level.
"""

import logging
from enum import Enum
from typing import Optional, Tuple, Union

from ..models import CheckableItem, ContentBlock, Note, Forest
from .locate import extract_node, node_path, replace_at


class Position(str, Enum):
    """Where to place a relocated block relative to its target."""

    BEFORE = "before"
    AFTER = "after"
    END = "end"


class MissingTargetPolicy(str, Enum):
    """What to do with a removed block whose target cannot be found."""

    END = "end"
    DROP = "drop"


def _insert_beside(
    forest: Forest,
    target_id: str,
    block: ContentBlock,
    position: Position
) -> Tuple[Forest, bool]:
    """Insert block before or after the first block with target_id."""
    for index, current in enumerate(forest):
        if current.id == target_id:
            at = index if position is Position.BEFORE else index + 1
            return forest[:at] + [block] + forest[at:], True

        if isinstance(current, CheckableItem) and current.children:
            children, inserted = _insert_beside(current.children, target_id, block, position)
            if inserted:
                return replace_at(forest, index, current.model_copy(update={"children": children})), True

    return forest, False


def relocate_node(
    forest: Forest,
    source_id: str,
    target_id: Optional[str],
    position: Union[Position, str],
    on_missing_target: Union[MissingTargetPolicy, str] = MissingTargetPolicy.END
) -> Forest:
    """
    Move the block source_id, with its subtree, before/after target_id or to the end.

    Args:
        forest: The forest to rearrange
        source_id: Identity of the block to move
        target_id: Identity of the block to move beside, or None for the end
        position: "before", "after" or "end"
        on_missing_target: Policy when target_id cannot be found once the
            source is removed (for example when it lies inside the moved
            subtree): "end" appends the block to the top level, "drop"
            leaves it out

    Returns:
        The rearranged forest, or the original forest when the source does
        not exist or the move is rejected

    Raises:
        ValueError: If position or on_missing_target is not a known value
    """
    position = Position(position)
    on_missing_target = MissingTargetPolicy(on_missing_target)

    if position is not Position.END and target_id == source_id:
        return forest

    remaining, moved = extract_node(forest, source_id)
    if moved is None:
        logging.debug(f"relocate_node: source block {source_id} not found")
        return forest

    if position is Position.END or target_id is None:
        return remaining + [moved]

    path = node_path(remaining, target_id)
    if path is None:
        logging.warning(
            f"relocate_node: target {target_id} not found after removing {source_id}; "
            f"applying '{on_missing_target.value}' policy"
        )
        if on_missing_target is MissingTargetPolicy.DROP:
            return remaining
        return remaining + [moved]

    if isinstance(moved, Note) and path:
        logging.warning(f"relocate_node: note {source_id} cannot be nested under {path[-1]}")
        return forest

    inserted, _ = _insert_beside(remaining, target_id, moved, position)
    return inserted
