"""
Note Query Composition.

Builders for the two dynamic statements of the note repository:

- the WHERE clause of the listing, assembled from the fixed NoteFilter
  set, owner scoping first and always present;
- the SET clause of a partial update, assembled from the fixed NoteField
  set, title and updated_at always present.

Both builders emit their parts in enum declaration order, so the shape of
the generated SQL and the order of its bound parameters depend only on
which options are present, never on the order the caller supplied them.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement, Select, Update, and_, select, update

from cloudnotes.backend.core.utils import utc_now
from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.expressions import TagContains, TextSearch


class NoteFilter(str, Enum):
    """Predicates a note listing can be restricted by, in clause order."""

    OWNER = "owner"
    ARCHIVED = "archived"
    PINNED = "pinned"
    TAG = "tag"
    SEARCH = "search"


class NoteField(str, Enum):
    """Columns a note update can assign, in SET clause order."""

    TITLE = "title"
    CONTENT = "content"
    TAGS = "tags"
    IS_PINNED = "is_pinned"
    UPDATED_AT = "updated_at"


# Fields the caller may leave out of an update
OPTIONAL_UPDATE_FIELDS = (NoteField.CONTENT, NoteField.TAGS, NoteField.IS_PINNED)


@dataclass(frozen=True)
class NoteFilters:
    """
    Listing options.

    ``archived`` selects the archived or the live notes and is always
    applied. ``pinned=True`` additionally keeps only pinned notes; False
    and None both mean no pin restriction. ``tag`` and ``search`` apply
    only when non-empty.
    """

    archived: bool = False
    pinned: bool | None = None
    tag: str | None = None
    search: str | None = None


def build_filter_clauses(
    owner_id: str,
    filters: NoteFilters,
    search_language: str = "english",
) -> list[tuple[NoteFilter, ColumnElement[bool]]]:
    """Return the (filter, clause) pairs for a listing, in NoteFilter order."""
    clauses: list[tuple[NoteFilter, ColumnElement[bool]]] = [
        (NoteFilter.OWNER, Note.owner_id == owner_id),
        (NoteFilter.ARCHIVED, Note.is_archived.is_(filters.archived)),
    ]

    if filters.pinned:
        clauses.append((NoteFilter.PINNED, Note.is_pinned.is_(True)))

    if filters.tag:
        clauses.append((NoteFilter.TAG, TagContains(Note.tags, filters.tag)))

    if filters.search and filters.search.strip():
        clauses.append((
            NoteFilter.SEARCH,
            TextSearch(filters.search.strip(), Note.title, Note.content, language=search_language),
        ))

    return clauses


def build_list_statement(
    owner_id: str,
    filters: NoteFilters,
    limit: int | None = None,
    offset: int = 0,
    search_language: str = "english",
) -> Select[tuple[Note]]:
    """
    Compose the listing SELECT.

    Ordering is fixed: pinned first, newest first, then id so that
    limit/offset pages are stable when timestamps collide.
    """
    clauses = build_filter_clauses(owner_id, filters, search_language)

    stmt = (
        select(Note)
        .where(and_(*(clause for _, clause in clauses)))
        .order_by(Note.is_pinned.desc(), Note.created_at.desc(), Note.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    if offset:
        stmt = stmt.offset(offset)
    return stmt


def build_assignments(title: str, changes: Mapping[NoteField, Any]) -> dict[str, Any]:
    """
    Build the ordered SET mapping of a partial update.

    Args:
        title: New title, always assigned
        changes: Optional fields present in the request; absent keys keep
            their stored value

    Raises:
        ValueError: If ``changes`` names a field that cannot be assigned
    """
    unknown = set(changes) - set(OPTIONAL_UPDATE_FIELDS)
    if unknown:
        raise ValueError(f"Not assignable: {sorted(field.value for field in unknown)}")

    assignments: dict[str, Any] = {NoteField.TITLE.value: title}
    for field in OPTIONAL_UPDATE_FIELDS:
        if field in changes:
            assignments[field.value] = changes[field]
    assignments[NoteField.UPDATED_AT.value] = utc_now()
    return assignments


def build_update_statement(owner_id: str, note_id: str, assignments: dict[str, Any]) -> Update:
    """
    Compose the owner-scoped UPDATE ... RETURNING for one note.

    SET clauses are emitted in the order of ``assignments`` rather than
    table column order.
    """
    return (
        update(Note)
        .where(Note.id == str(note_id), Note.owner_id == owner_id)
        .ordered_values(*assignments.items())
        .returning(Note)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
