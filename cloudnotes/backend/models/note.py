"""
Note Model.

Database model for notes. Every note belongs to exactly one user for its
whole life; ``owner_id`` is set at creation and never reassigned.
"""

from sqlalchemy import JSON, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from cloudnotes.backend.models.base import Base, TimestampMixin, UUIDMixin

# TEXT[] on PostgreSQL, a JSON array elsewhere (the SQLite test database)
TagList = ARRAY(String(100)).with_variant(JSON(), "sqlite")


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    ``is_archived`` is a soft-delete marker: archived notes drop out of the
    default listing and the tag cloud but are kept until hard-deleted.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index("ix_notes_owner_archived_pinned", "owner_id", "is_archived", "is_pinned"),
    )

    owner_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    file_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
    )
    tags: Mapped[list[str]] = mapped_column(
        TagList,
        default=list,
        nullable=False,
    )
    is_pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
