"""
Board manager for Checktree.

This module provides the BoardManager class that holds the authoritative task
list and applies user actions to it. Every edit of a task's content goes
through the tree engine; the board only swaps the resulting forest into the
task and keeps categories in sync.
"""

import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..config import config
from ..engine import (
    Position,
    Progress,
    count_progress,
    relocate_node,
    remove_node,
    set_all_completed,
    toggle_cascade,
    transform_node,
)
from ..models import CheckableItem, ContentBlock, Forest, Note, Priority, Task, TaskStatus, new_id

DETAIL_FIELDS = ("priority", "due_date", "category", "color")


class BoardManager:
    """
    Manages the list of tasks and their categories.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None, categories: Optional[Iterable[str]] = None):
        """
        Initialize the board.

        Args:
            tasks: Initial tasks, in display order
            categories: Known categories; derived from the tasks when omitted
        """
        self.tasks: List[Task] = list(tasks or [])
        if categories is None:
            categories = [task.category for task in self.tasks if task.category]
        self.categories: List[str] = sorted(set(categories))

    # ---------- Lookup ----------

    def _index_of(self, task_id: str) -> int:
        return next((i for i, task in enumerate(self.tasks) if task.id == task_id), -1)

    def get_task(self, task_id: str) -> Optional[Task]:
        """
        Get a task by identity.

        Args:
            task_id: Identity of the task

        Returns:
            The task, or None if not found
        """
        index = self._index_of(task_id)
        return self.tasks[index] if index >= 0 else None

    def _replace_task(self, task_id: str, update: Callable[[Task], Task]) -> bool:
        index = self._index_of(task_id)
        if index < 0:
            logging.info(f"Task {task_id} not found")
            return False

        task = self.tasks[index]
        new_task = update(task)
        if new_task is task:
            return False
        self.tasks[index] = new_task
        return True

    def _edit_content(self, task_id: str, edit: Callable[[Forest], Tuple[Forest, bool]]) -> bool:
        """Apply a forest edit to one task; True when the forest changed."""
        def update(task: Task) -> Task:
            content, found = edit(task.content)
            if not found or content is task.content:
                return task
            return task.model_copy(update={"content": content})

        return self._replace_task(task_id, update)

    # ---------- Tasks ----------

    def add_task(self, title: Optional[str] = None, category: Optional[str] = None) -> Task:
        """
        Create an empty task at the top of the board.

        Args:
            title: Task title (defaults to the configured title)
            category: Optional category

        Returns:
            The new task
        """
        task = Task(
            id=new_id(),
            title=title or config.new_task_title,
            priority=config.default_priority,
            category=category or None,
        )
        self.tasks.insert(0, task)
        if task.category:
            self.add_category(task.category)
        logging.info(f"Added task {task.id}: {task.title}")
        return task

    def delete_task(self, task_id: str) -> bool:
        """Remove a task from the board."""
        index = self._index_of(task_id)
        if index < 0:
            return False
        del self.tasks[index]
        logging.info(f"Deleted task {task_id}")
        return True

    def toggle_archive(self, task_id: str) -> bool:
        """Flip the archived flag of a task."""
        return self._replace_task(task_id, lambda task: task.model_copy(update={"archived": not task.archived}))

    def update_title(self, task_id: str, title: str) -> bool:
        """Rename a task."""
        return self._replace_task(task_id, lambda task: task.model_copy(update={"title": title}))

    def update_details(self, task_id: str, **details) -> bool:
        """
        Update task metadata.

        Args:
            task_id: Identity of the task
            **details: Any of priority, due_date, category, color

        Returns:
            True if the task was found and a detail changed

        Raises:
            ValueError: If an unknown detail is given or a value is invalid
        """
        unknown = set(details) - set(DETAIL_FIELDS)
        if unknown:
            raise ValueError(f"Unknown task details: {', '.join(sorted(unknown))}")

        changes: Dict[str, object] = {}
        if "priority" in details:
            changes["priority"] = Priority(details["priority"] or Priority.NONE)
        if "due_date" in details:
            changes["due_date"] = _parse_due_date(details["due_date"])
        if "category" in details:
            category = (details["category"] or "").strip()
            if category:
                self.add_category(category)
            changes["category"] = category or None
        if "color" in details:
            changes["color"] = details["color"] or None

        def update(task: Task) -> Task:
            if all(getattr(task, field) == value for field, value in changes.items()):
                return task
            return task.model_copy(update=changes)

        return self._replace_task(task_id, update)

    def move_task(self, source_id: str, target_id: str, position: Union[Position, str]) -> bool:
        """
        Move a task before or after another task.

        Returns:
            True if the order changed
        """
        position = Position(position)
        if position is Position.END:
            raise ValueError("Tasks can only be moved before or after another task")

        source_index = self._index_of(source_id)
        target_index = self._index_of(target_id)
        if source_index < 0 or target_index < 0 or source_index == target_index:
            return False

        moved = self.tasks.pop(source_index)
        target_index = self._index_of(target_id)
        if position is Position.AFTER:
            target_index += 1
        self.tasks.insert(target_index, moved)
        return True

    def add_suggested_tasks(self, tasks: Iterable[Task]) -> List[Task]:
        """
        Put externally created tasks at the top of the board.

        Returns:
            The tasks that were added
        """
        new_tasks = list(tasks)
        self.tasks[:0] = new_tasks
        for task in new_tasks:
            if task.category:
                self.add_category(task.category)
        logging.info(f"Added {len(new_tasks)} suggested tasks")
        return new_tasks

    def reset(self, tasks: Iterable[Task]) -> None:
        """Replace every task and rebuild the category list."""
        self.tasks = list(tasks)
        self.categories = sorted({task.category for task in self.tasks if task.category})

    # ---------- Content blocks ----------

    def add_block(self, task_id: str, kind: str = "subitem") -> Optional[str]:
        """
        Append an empty block to a task's top level.

        Args:
            task_id: Identity of the task
            kind: "subitem" for a checkable item or "text" for a note

        Returns:
            Identity of the new block, or None if the task was not found
        """
        if kind == "subitem":
            block: ContentBlock = CheckableItem(id=new_id())
        elif kind == "text":
            block = Note(id=new_id())
        else:
            raise ValueError(f"Unknown block kind: {kind}")

        added = self._edit_content(task_id, lambda content: (content + [block], True))
        return block.id if added else None

    def add_nested_item(self, task_id: str, parent_id: str) -> Optional[str]:
        """
        Append an empty checkable item to the children of parent_id.

        Returns:
            Identity of the new item, or None if the task or parent was not found
        """
        child = CheckableItem(id=new_id())

        def append_child(parent: CheckableItem) -> CheckableItem:
            return parent.model_copy(update={"children": parent.children + [child]})

        added = self._edit_content(task_id, lambda content: transform_node(content, parent_id, append_child))
        return child.id if added else None

    def update_block(self, task_id: str, block_id: str, text: Optional[str] = None,
                     completed: Optional[bool] = None) -> bool:
        """
        Edit the text or completion flag of a block.

        Completion is a plain assignment, without cascade, and is ignored
        for notes.
        """
        def apply(block: ContentBlock) -> ContentBlock:
            update: Dict[str, object] = {}
            if text is not None:
                update["text"] = text
            if completed is not None and isinstance(block, CheckableItem):
                update["completed"] = completed
            return block.model_copy(update=update) if update else block

        return self._edit_content(
            task_id, lambda content: transform_node(content, block_id, apply, include_notes=True)
        )

    def delete_block(self, task_id: str, block_id: str) -> bool:
        """Delete a block and its whole subtree."""
        return self._edit_content(task_id, lambda content: remove_node(content, block_id))

    def toggle_item(self, task_id: str, item_id: str) -> bool:
        """Toggle a checkable item with cascade."""
        return self._edit_content(task_id, lambda content: (toggle_cascade(content, item_id), True))

    def toggle_all(self, task_id: str, completed: bool) -> bool:
        """Mark every checkable item of a task as completed or not completed."""
        return self._edit_content(task_id, lambda content: (set_all_completed(content, completed), True))

    def move_block(self, task_id: str, source_id: str, target_id: Optional[str],
                   position: Union[Position, str]) -> bool:
        """Relocate a block inside a task using the configured missing-target policy."""
        return self._edit_content(
            task_id,
            lambda content: (
                relocate_node(content, source_id, target_id, position, config.missing_target_policy),
                True,
            ),
        )

    # ---------- Categories ----------

    def add_category(self, name: str) -> bool:
        """Register a category name; returns False for blanks and duplicates."""
        name = name.strip()
        if not name or name in self.categories:
            return False
        self.categories = sorted(self.categories + [name])
        return True

    def delete_category(self, name: str) -> bool:
        """Forget a category and clear it from every task using it."""
        if name not in self.categories:
            return False
        self.categories = [c for c in self.categories if c != name]
        self.tasks = [
            task.model_copy(update={"category": None}) if task.category == name else task
            for task in self.tasks
        ]
        logging.info(f"Deleted category {name}")
        return True

    # ---------- Queries ----------

    def progress(self, task_id: str) -> Progress:
        """Progress of a task's checkable items; empty for unknown tasks."""
        task = self.get_task(task_id)
        return count_progress(task.content) if task else Progress()

    @staticmethod
    def task_status(task: Task) -> TaskStatus:
        """
        Derive the status of a task from its top-level checkable items.

        A task without top-level checkable items is in progress.
        """
        items = [block for block in task.content if isinstance(block, CheckableItem)]
        if items and all(item.completed for item in items):
            return TaskStatus.COMPLETED
        return TaskStatus.IN_PROGRESS

    def filter_tasks(
        self,
        show_archived: bool = False,
        priority: Optional[Union[Priority, str]] = None,
        category: Optional[str] = None,
        status: Optional[Union[TaskStatus, str]] = None,
        query: str = ""
    ) -> List[Task]:
        """
        Select tasks for display.

        Args:
            show_archived: Show archived tasks instead of active ones
            priority: Only tasks with this priority
            category: Only tasks in this category
            status: Only tasks with this derived status
            query: Case-insensitive text searched in titles, categories and blocks

        Returns:
            Matching tasks in board order
        """
        priority = Priority(priority) if priority else None
        status = TaskStatus(status) if status else None
        needle = query.strip().lower()

        return [
            task for task in self.tasks
            if task.archived == show_archived
            and (priority is None or task.priority is priority)
            and (category is None or task.category == category)
            and (status is None or self.task_status(task) is status)
            and (not needle or _task_matches(task, needle))
        ]


def _parse_due_date(value) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Invalid due date: {value!r}") from None


def _content_matches(content: Forest, needle: str) -> bool:
    for block in content:
        if needle in block.text.lower():
            return True
        if isinstance(block, CheckableItem) and _content_matches(block.children, needle):
            return True
    return False


def _task_matches(task: Task, needle: str) -> bool:
    return (
        needle in task.title.lower()
        or (task.category is not None and needle in task.category.lower())
        or _content_matches(task.content, needle)
    )
