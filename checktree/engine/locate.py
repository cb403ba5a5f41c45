"""
Locate-and-transform and locate-and-remove over a content forest.

Every function here is pure: the input forest is never modified, and any
subtree that does not contain the target is returned as the very same
object so callers can detect "nothing changed" with an identity check.
Search order is pre-order depth-first, top-level blocks left to right, and
the first match wins.
"""

import logging
from typing import Callable, List, Optional, Tuple

from ..models import CheckableItem, ContentBlock, Forest


def replace_at(forest: Forest, index: int, block: ContentBlock) -> Forest:
    """Return a copy of forest with the block at index swapped for block."""
    new_forest = list(forest)
    new_forest[index] = block
    return new_forest


def transform_node(
    forest: Forest,
    target_id: str,
    transform: Callable[[ContentBlock], ContentBlock],
    include_notes: bool = False
) -> Tuple[Forest, bool]:
    """
    Replace the first block with the given identity by transform(block).

    Only checkable items are eligible targets unless include_notes is set;
    notes are still scanned over. Only checkable items are descended into.

    Args:
        forest: The forest to search
        target_id: Identity of the block to transform
        transform: Function producing the replacement block
        include_notes: Also accept a note as the target

    Returns:
        Tuple of (new forest, found). When nothing matches, the original
        forest object is returned with found=False.
    """
    for index, block in enumerate(forest):
        if block.id == target_id and (include_notes or isinstance(block, CheckableItem)):
            return replace_at(forest, index, transform(block)), True

        if isinstance(block, CheckableItem) and block.children:
            children, found = transform_node(block.children, target_id, transform, include_notes)
            if found:
                return replace_at(forest, index, block.model_copy(update={"children": children})), True

    return forest, False


def extract_node(forest: Forest, target_id: str) -> Tuple[Forest, Optional[ContentBlock]]:
    """
    Remove the first block with the given identity, of either variant.

    The removed block keeps its whole subtree; descendants are never
    promoted to the removed block's position.

    Returns:
        Tuple of (new forest, removed block or None)
    """
    for index, block in enumerate(forest):
        if block.id == target_id:
            return forest[:index] + forest[index + 1:], block

        if isinstance(block, CheckableItem) and block.children:
            children, removed = extract_node(block.children, target_id)
            if removed is not None:
                return replace_at(forest, index, block.model_copy(update={"children": children})), removed

    return forest, None


def remove_node(forest: Forest, target_id: str) -> Tuple[Forest, bool]:
    """
    Delete the first block with the given identity and everything below it.

    Returns:
        Tuple of (new forest, found)
    """
    new_forest, removed = extract_node(forest, target_id)
    if removed is None:
        logging.debug(f"remove_node: block {target_id} not found")
        return forest, False
    return new_forest, True


def find_node(forest: Forest, target_id: str) -> Optional[ContentBlock]:
    """Return the first block with the given identity, or None."""
    for block in forest:
        if block.id == target_id:
            return block

        if isinstance(block, CheckableItem) and block.children:
            match = find_node(block.children, target_id)
            if match is not None:
                return match

    return None


def node_path(forest: Forest, target_id: str) -> Optional[List[str]]:
    """
    Return the identities of the ancestors of target_id, root first.

    An empty list means the block sits in the top-level forest; None means
    it was not found.
    """
    for block in forest:
        if block.id == target_id:
            return []

        if isinstance(block, CheckableItem) and block.children:
            path = node_path(block.children, target_id)
            if path is not None:
                return [block.id] + path

    return None
