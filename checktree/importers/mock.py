"""
Mock importer for Checktree.

This module provides the built-in sample board used on first run, on reset,
and by tests that need a realistic set of tasks.
"""

from datetime import date, datetime, timezone
from typing import List

from ..models import CheckableItem, Note, Priority, Task
from .base import BaseImporter


class MockImporter(BaseImporter):
    """
    Mock importer that returns hardcoded sample tasks.
    """

    def __init__(self):
        """Initialize the mock importer with sample data."""
        self._sample_tasks = self._create_sample_tasks()

    def get_all_tasks(self) -> List[Task]:
        """
        Return all hardcoded sample tasks.

        Returns:
            List of sample Task objects
        """
        return list(self._sample_tasks)

    def _create_sample_tasks(self) -> List[Task]:
        """
        Create the sample board.

        Returns:
            List of tasks covering notes, flat items and nested items
        """
        tasks = []

        # Task 1: a note followed by a flat checklist
        tasks.append(Task(
            id="1",
            title="Finish the project proposal",
            content=[
                Note(id="1-desc", text="Next steps to wrap up the proposal before review:"),
                CheckableItem(id="1-1", text="Revise the introduction", completed=True),
                CheckableItem(id="1-2", text="Remove duplicated paragraphs"),
                CheckableItem(id="1-3", text="Merge both drafts into a single introduction"),
            ],
            priority=Priority.HIGH,
            due_date=date(2024, 8, 15),
            category="Academic",
            color="#581c1c",
            created_at=datetime(2024, 8, 10, 10, 0, tzinfo=timezone.utc),
        ))

        # Task 2: nested checklist
        tasks.append(Task(
            id="2",
            title="Write the theoretical framework",
            content=[
                CheckableItem(id="2-1", text="Section 5.1: define the core concepts", children=[
                    CheckableItem(id="2-1-1", text="Collect references"),
                    CheckableItem(id="2-1-2", text="Draft the definitions"),
                ]),
                CheckableItem(id="2-2", text="Section 5.2: historical background"),
                CheckableItem(id="2-3", text="Section 5.3: symbolic analysis"),
                CheckableItem(id="2-4", text="Section 5.4 (optional): related work"),
            ],
            priority=Priority.MEDIUM,
            category="Academic",
            created_at=datetime(2024, 8, 11, 11, 0, tzinfo=timezone.utc),
        ))

        # Task 3: notes only
        tasks.append(Task(
            id="3",
            title="Ideas for later",
            content=[
                Note(id="3-1", text="- Research the history of the topic.\n- Interview practitioners."),
            ],
            priority=Priority.LOW,
            category="Research",
            created_at=datetime(2024, 8, 12, 12, 0, tzinfo=timezone.utc),
        ))

        return tasks
