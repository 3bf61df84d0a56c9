"""
Note Service.

Business logic layer for notes. Every method takes the owner id resolved
by the access gate; the repository scopes each statement by it.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.note import NoteRepository
from cloudnotes.backend.repositories.note_query import (
    NoteField,
    NoteFilters,
    build_assignments,
)
from cloudnotes.backend.schemas.note import NoteCreate, NoteUpdate
from cloudnotes.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Args:
        session: Request-scoped async session
        search_language: Text search configuration for the search filter
    """

    def __init__(self, session: AsyncSession, search_language: str = "english") -> None:
        super().__init__(session)
        self.repo = NoteRepository(session, search_language=search_language)

    async def create_note(self, owner_id: str, data: NoteCreate) -> Note:
        """
        Create a note for the owner.

        Raises:
            ValidationError: If the title is blank
        """
        self._validate_required({"title": data.title}, ["title"])
        self._log_operation("Creating note", owner_id=owner_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                owner_id=owner_id,
                title=data.title,
                content=data.content,
                file_url=data.file_url,
                tags=list(data.tags),
                is_pinned=data.is_pinned,
                is_archived=False,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, owner_id: str, note_id: str) -> Note:
        """
        Get one of the owner's notes.

        Raises:
            NotFoundError: If the note is missing or belongs to someone else
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_for_owner(owner_id, note_id),
        )

    async def list_notes(
        self,
        owner_id: str,
        filters: NoteFilters | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Note]:
        """List the owner's notes, pinned first then newest first."""
        filters = filters or NoteFilters()
        self._log_debug(
            "Listing notes",
            owner_id=owner_id,
            archived=filters.archived,
            pinned=filters.pinned,
            tag=filters.tag,
            has_search=bool(filters.search),
        )
        return await self._execute_db_operation(
            "list_notes",
            self.repo.list_for_owner(owner_id, filters, limit=limit, offset=offset),
        )

    async def update_note(self, owner_id: str, note_id: str, data: NoteUpdate) -> Note:
        """
        Partially update a note.

        The title is always written; content, tags and is_pinned only when
        the request carried them.

        Raises:
            ValidationError: If the title is blank; nothing is written
            NotFoundError: If the note is missing or belongs to someone else
        """
        self._validate_required({"title": data.title}, ["title"])

        changes: dict[NoteField, Any] = {}
        if "content" in data.model_fields_set:
            changes[NoteField.CONTENT] = data.content
        if "tags" in data.model_fields_set:
            changes[NoteField.TAGS] = list(data.tags)
        if "is_pinned" in data.model_fields_set:
            changes[NoteField.IS_PINNED] = data.is_pinned

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=[NoteField.TITLE.value, *(field.value for field in changes)],
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update_for_owner(owner_id, note_id, build_assignments(data.title, changes)),
        )

    async def delete_note(self, owner_id: str, note_id: str) -> None:
        """
        Hard-delete a note.

        Raises:
            NotFoundError: If the note is missing or belongs to someone else
        """
        self._log_operation("Deleting note", note_id=note_id)
        await self._execute_db_operation(
            "delete_note",
            self.repo.delete_for_owner(owner_id, note_id),
        )

    async def toggle_pin(self, owner_id: str, note_id: str) -> Note:
        """Flip the pin flag of a note."""
        self._log_operation("Toggling pin", note_id=note_id)
        return await self._execute_db_operation(
            "toggle_pin",
            self.repo.toggle_pin(owner_id, note_id),
        )

    async def archive_note(self, owner_id: str, note_id: str) -> Note:
        """Archive a note."""
        self._log_operation("Archiving note", note_id=note_id)
        return await self._execute_db_operation(
            "archive_note",
            self.repo.set_archived(owner_id, note_id, True),
        )

    async def unarchive_note(self, owner_id: str, note_id: str) -> Note:
        """Restore an archived note."""
        self._log_operation("Unarchiving note", note_id=note_id)
        return await self._execute_db_operation(
            "unarchive_note",
            self.repo.set_archived(owner_id, note_id, False),
        )

    async def list_tags(self, owner_id: str) -> list[str]:
        """Distinct tags of the owner's live notes, sorted."""
        return await self._execute_db_operation(
            "list_tags",
            self.repo.tags_for_owner(owner_id),
        )
