"""
Content block models for Checktree.

This module defines the two content block variants a task is made of:
checkable items, which nest to any depth, and free-text notes, which are
always leaves. Blocks are immutable; the engine builds new blocks instead
of editing them in place.
"""

import uuid
from typing import Annotated, List, Union, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    """Return a fresh opaque block identity."""
    return uuid.uuid4().hex


class CheckableItem(BaseModel):
    """
    A checklist entry with a completion flag and nested checkable children.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Identity of the item, unique within one task"
    )

    type: Literal["subitem"] = Field(
        default="subitem",
        description="Variant tag used on the wire"
    )

    text: str = Field(
        default="",
        description="The display text of the item"
    )

    completed: bool = Field(
        default=False,
        description="Whether the item has been checked off"
    )

    children: List['CheckableItem'] = Field(
        default_factory=list,
        description="Nested checkable items, in display order"
    )

    @field_validator("completed", mode="before")
    @classmethod
    def _default_completed(cls, value):
        # Older records stored null or nothing at all
        return False if value is None else value

    @field_validator("children", mode="before")
    @classmethod
    def _default_children(cls, value):
        return [] if value is None else value


class Note(BaseModel):
    """
    A free-text block. Notes carry no completion state and never have children.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Identity of the note, unique within one task"
    )

    type: Literal["text"] = Field(
        default="text",
        description="Variant tag used on the wire"
    )

    text: str = Field(
        default="",
        description="The note body"
    )


# Enable forward references for self-referencing model
CheckableItem.model_rebuild()

ContentBlock = Annotated[Union[CheckableItem, Note], Field(discriminator="type")]

Forest = List[ContentBlock]
