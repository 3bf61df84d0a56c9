"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _unique_in_order(tags: list[str]) -> list[str]:
    """Collapse duplicate tags, keeping the first occurrence of each."""
    return list(dict.fromkeys(tags))


Tag = Annotated[str, Field(min_length=1, max_length=100)]
TagList = Annotated[list[Tag], AfterValidator(_unique_in_order)]


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Work Note"],
    )
    content: str | None = Field(
        default=None,
        max_length=100000,
        description="Note content",
        examples=["Important meeting"],
    )
    file_url: str | None = Field(
        default=None,
        max_length=2048,
        description="Reference to an attachment stored elsewhere",
    )
    tags: TagList = Field(
        default_factory=list,
        description="Tags; duplicates collapse, order is kept",
        examples=[["work", "meeting"]],
    )
    is_pinned: bool = Field(default=False, description="Pin the note to the top")


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    ``title`` is mandatory. The other fields are rewritten only when they
    appear in the request body; absent fields keep their stored value.
    Sending ``content: null`` clears the content.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        max_length=100000,
        description="Note content",
    )
    tags: TagList = Field(
        default_factory=list,
        description="Replacement tag list",
    )
    is_pinned: bool = Field(default=False, description="Pin state")


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    owner_id: str = Field(description="Owning user")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Note content")
    file_url: str | None = Field(description="Attachment reference")
    tags: list[str] = Field(description="Tags in insertion order")
    is_pinned: bool = Field(description="Whether the note is pinned")
    is_archived: bool = Field(description="Whether the note is archived")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
