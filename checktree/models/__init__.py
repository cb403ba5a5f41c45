"""Data models for Checktree."""

from .blocks import CheckableItem, Note, ContentBlock, Forest, new_id
from .task import Task, Priority, TaskStatus

__all__ = [
    "CheckableItem",
    "Note",
    "ContentBlock",
    "Forest",
    "new_id",
    "Task",
    "Priority",
    "TaskStatus"
]
