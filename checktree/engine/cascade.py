"""
Cascade toggling of checkable items.

Toggling an item flips its completion flag and forces every descendant to
the same value. When the toggle un-completes an item, every ancestor on the
path back to the root is forced to not-completed as well. Completing an
item never completes its ancestors.
"""

import logging
from typing import Tuple

from ..models import CheckableItem, Forest
from .locate import replace_at


def mark_subtree(item: CheckableItem, completed: bool) -> CheckableItem:
    """
    Set completed on item and all of its descendants.

    Subtrees that already hold the requested value are returned unchanged.
    """
    children = [mark_subtree(child, completed) for child in item.children]
    unchanged = all(new is old for new, old in zip(children, item.children))
    if item.completed == completed and unchanged:
        return item
    return item.model_copy(update={"completed": completed, "children": children})


def set_all_completed(forest: Forest, completed: bool) -> Forest:
    """Set the completion flag of every checkable item in the forest."""
    new_forest = [
        mark_subtree(block, completed) if isinstance(block, CheckableItem) else block
        for block in forest
    ]
    if all(new is old for new, old in zip(new_forest, forest)):
        return forest
    return new_forest


def toggle_with_signal(forest: Forest, target_id: str) -> Tuple[Forest, bool, bool]:
    """
    One recursive step of the cascade toggle.

    Returns:
        Tuple of (new forest, found, uncompleted) where uncompleted tells the
        caller that the toggle turned the target off, so every ancestor of
        it must be forced to not-completed.
    """
    for index, block in enumerate(forest):
        if not isinstance(block, CheckableItem):
            continue

        if block.id == target_id:
            completed = not block.completed
            return replace_at(forest, index, mark_subtree(block, completed)), True, not completed

        if block.children:
            children, found, uncompleted = toggle_with_signal(block.children, target_id)
            if found:
                update = {"children": children}
                if uncompleted:
                    update["completed"] = False
                return replace_at(forest, index, block.model_copy(update=update)), True, uncompleted

    return forest, False, False


def toggle_cascade(forest: Forest, target_id: str) -> Forest:
    """
    Flip the completion of a checkable item and cascade the change.

    Args:
        forest: The forest holding the item
        target_id: Identity of the checkable item to toggle

    Returns:
        The new forest, or the original forest when no checkable item has
        the given identity
    """
    new_forest, found, _ = toggle_with_signal(forest, target_id)
    if not found:
        logging.debug(f"toggle_cascade: checkable item {target_id} not found")
    return new_forest
