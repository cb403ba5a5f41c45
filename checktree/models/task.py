"""
Task models for Checktree.

A task owns an ordered forest of content blocks plus metadata (priority,
due date, category, archived flag) that the tree engine never touches.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .blocks import ContentBlock


class Priority(str, Enum):
    """Priority levels for a task."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    """Derived status used when filtering the board."""

    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """
    A checklist task and its top-level content forest.

    Field aliases follow the camelCase keys of stored records so that
    backups written by earlier versions load without conversion.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        ...,
        description="Identity of the task"
    )

    title: str = Field(
        ...,
        description="The task title"
    )

    content: List[ContentBlock] = Field(
        default_factory=list,
        description="Top-level content blocks in display order"
    )

    priority: Priority = Field(
        default=Priority.NONE,
        description="Task priority"
    )

    due_date: Optional[date] = Field(
        default=None,
        alias="dueDate",
        description="Optional due date"
    )

    category: Optional[str] = Field(
        default=None,
        description="Optional category label"
    )

    archived: bool = Field(
        default=False,
        description="Whether the task is archived"
    )

    color: Optional[str] = Field(
        default=None,
        description="Optional card color"
    )

    created_at: datetime = Field(
        default_factory=_utc_now,
        alias="createdAt",
        description="Creation timestamp"
    )

    @field_validator("content", mode="before")
    @classmethod
    def _default_content(cls, value):
        return [] if value is None else value

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value):
        return Priority.NONE if value in (None, "") else value

    @field_validator("due_date", "category", "color", mode="before")
    @classmethod
    def _empty_as_none(cls, value):
        # Stored records use "" for "not set"
        return None if value == "" else value

    @field_validator("archived", mode="before")
    @classmethod
    def _default_archived(cls, value):
        return False if value is None else value
