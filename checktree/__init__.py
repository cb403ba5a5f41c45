"""
Checktree: a checklist manager with nestable checklist items.

Tasks hold a tree of checkable items and notes; the engine package provides
the pure structural operations used to edit that tree.
"""

__version__ = "0.1.0"
__author__ = "Checktree Project"

# Import main components
from .models import CheckableItem, Note, Task, Priority
from .engine import transform_node, remove_node, toggle_cascade, relocate_node, count_progress
from .board import BoardManager
from .database import DatabaseManager
from .importers import BaseImporter, MockImporter, JSONBackupImporter, SuggestionImporter

__all__ = [
    "CheckableItem",
    "Note",
    "Task",
    "Priority",
    "transform_node",
    "remove_node",
    "toggle_cascade",
    "relocate_node",
    "count_progress",
    "BoardManager",
    "DatabaseManager",
    "BaseImporter",
    "MockImporter",
    "JSONBackupImporter",
    "SuggestionImporter"
]
