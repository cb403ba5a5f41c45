"""
Suggestion importer for Checktree.

Assistants (voice or chat) hand over plain task outlines of the form
{"title": ..., "subItems": [...]}. This importer turns them into new tasks
with fresh identities so they can be added to a board without colliding
with existing blocks.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models import CheckableItem, Priority, Task, new_id
from .base import BaseImporter


class SuggestionImporter(BaseImporter):
    """
    Builds tasks from assistant-provided outlines.
    """

    def __init__(self, suggestions: List[Dict[str, Any]], category: Optional[str] = None):
        """
        Initialize the suggestion importer.

        Args:
            suggestions: Outlines with a "title" and an optional "subItems" list
            category: Category assigned to every created task
        """
        self.suggestions = suggestions
        self.category = category

    def get_all_tasks(self) -> List[Task]:
        """
        Create one task per outline.

        Outlines without a title are skipped.

        Returns:
            List of new tasks, in outline order
        """
        tasks = []
        for suggestion in self.suggestions:
            title = str(suggestion.get("title") or "").strip()
            if not title:
                logging.warning(f"Skipping suggestion without a title: {suggestion}")
                continue

            task_id = new_id()
            items = [
                CheckableItem(id=f"{task_id}-{index}", text=str(text))
                for index, text in enumerate(suggestion.get("subItems") or [])
            ]
            tasks.append(Task(
                id=task_id,
                title=title,
                content=items,
                priority=Priority.NONE,
                category=self.category,
            ))

        return tasks
