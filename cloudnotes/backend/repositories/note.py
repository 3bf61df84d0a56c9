"""
Note Repository.

Data access layer for notes. Every method takes the owner id and puts it
in the WHERE clause next to the note id, so a note of another owner is
indistinguishable from a missing one: both raise NotFoundError.

Each operation is a single statement. Mutations use UPDATE/DELETE ...
RETURNING so the row is written and read back in one round trip.
"""

from typing import Any

from sqlalchemy import ColumnElement, delete, func, not_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.exceptions import NotFoundError
from cloudnotes.backend.core.utils import utc_now
from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.base import BaseRepository
from cloudnotes.backend.repositories.expressions import HasTags
from cloudnotes.backend.repositories.note_query import (
    NoteFilters,
    build_list_statement,
    build_update_statement,
)

NOTE_NOT_FOUND = "Note not found"


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Args:
        session: Request-scoped async session
        search_language: Text search configuration used for full-text
            matching on PostgreSQL
    """

    model = Note

    def __init__(self, session: AsyncSession, search_language: str = "english") -> None:
        super().__init__(session)
        self.search_language = search_language

    @staticmethod
    def _scope(owner_id: str, note_id: str) -> tuple[ColumnElement[bool], ...]:
        return (Note.id == str(note_id), Note.owner_id == owner_id)

    async def list_for_owner(
        self,
        owner_id: str,
        filters: NoteFilters,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Note]:
        """
        List an owner's notes, pinned first then newest first.

        Args:
            owner_id: Requesting owner
            filters: Archived/pinned/tag/search options, combined with AND
            limit: Page size, or None for everything
            offset: Rows to skip
        """
        stmt = build_list_statement(
            owner_id,
            filters,
            limit=limit,
            offset=offset,
            search_language=self.search_language,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_owner(self, owner_id: str, note_id: str) -> Note:
        """
        Get one note of the owner.

        Raises:
            NotFoundError: If no note has this id under this owner
        """
        result = await self.session.execute(select(Note).where(*self._scope(owner_id, note_id)))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return note

    async def update_for_owner(
        self,
        owner_id: str,
        note_id: str,
        assignments: dict[str, Any],
    ) -> Note:
        """
        Apply a prepared SET mapping to one note and return the new row.

        Raises:
            NotFoundError: If the update matched no row
        """
        result = await self.session.execute(build_update_statement(owner_id, note_id, assignments))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return note

    async def toggle_pin(self, owner_id: str, note_id: str) -> Note:
        """
        Flip is_pinned in place.

        The negation happens inside the UPDATE, so concurrent toggles are
        serialized by the database row lock and none is lost.
        """
        return await self.update_for_owner(
            owner_id,
            note_id,
            {"is_pinned": not_(Note.is_pinned), "updated_at": utc_now()},
        )

    async def set_archived(self, owner_id: str, note_id: str, archived: bool) -> Note:
        """Set is_archived to exactly ``archived``."""
        return await self.update_for_owner(
            owner_id,
            note_id,
            {"is_archived": archived, "updated_at": utc_now()},
        )

    async def delete_for_owner(self, owner_id: str, note_id: str) -> None:
        """
        Hard-delete one note.

        Raises:
            NotFoundError: If the delete matched no row
        """
        stmt = (
            delete(Note)
            .where(*self._scope(owner_id, note_id))
            .returning(Note.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise NotFoundError(NOTE_NOT_FOUND)

    async def tags_for_owner(self, owner_id: str) -> list[str]:
        """Distinct tags over the owner's non-archived notes, sorted ascending."""
        result = await self.session.execute(
            select(Note.tags).where(
                Note.owner_id == owner_id,
                Note.is_archived.is_(False),
            )
        )
        return sorted({tag for tags in result.scalars() for tag in tags or ()})

    async def counters(self) -> dict[str, int]:
        """Global note counters, computed in one aggregate query."""
        stmt = select(
            func.count().filter(Note.is_archived.is_(False)).label("notes"),
            func.count().filter(Note.is_archived.is_(True)).label("archived"),
            func.count().filter(Note.is_pinned.is_(True)).label("pinned"),
            func.count().filter(HasTags(Note.tags)).label("tagged"),
        ).select_from(Note)
        row = (await self.session.execute(stmt)).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
