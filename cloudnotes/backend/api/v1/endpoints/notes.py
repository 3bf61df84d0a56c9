"""
Notes API Endpoints.

REST API endpoints for note management. Every route requires a session
token and operates only on the caller's own notes; someone else's note
answers 404 exactly like a missing one.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from cloudnotes.backend.core.pagination import PaginationParams, get_pagination_params
from cloudnotes.backend.repositories.note_query import NoteFilters
from cloudnotes.backend.schemas.base import ApiResponse, ResponseMetadata
from cloudnotes.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from cloudnotes.backend.services.note import NoteService

router = APIRouter()


def get_note_service(db: DbSession) -> NoteService:
    """Build the note service with the configured text search language."""
    return NoteService(db, search_language=get_app_config().database.search_language)


Notes = Annotated[NoteService, Depends(get_note_service)]


def _note_response(note, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description=(
        "List the caller's notes, pinned first then newest first. "
        "Archived notes are only returned with archived=true."
    ),
)
async def list_notes(
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    search: str | None = Query(
        default=None,
        max_length=200,
        description="Full-text search over title and content",
    ),
    tag: str | None = Query(default=None, max_length=100, description="Exact tag"),
    archived: bool = Query(default=False, description="List archived notes instead"),
    pinned: bool | None = Query(default=None, description="Only pinned notes when true"),
) -> ApiResponse[list[NoteResponse]]:
    filters = NoteFilters(archived=archived, pinned=pinned, tag=tag, search=search)
    notes = await service.list_notes(
        owner_id,
        filters,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
)
async def create_note(
    data: NoteCreate,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.create_note(owner_id, data)
    return _note_response(note, request_id)


# Declared before /{note_id} so "tags" is not captured as an id
@router.get(
    "/tags/all",
    response_model=ApiResponse[list[str]],
    summary="List tags",
    description="Distinct tags of the caller's non-archived notes, sorted.",
)
async def list_tags(
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[list[str]]:
    tags = await service.list_tags(owner_id)
    return ApiResponse(data=tags, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: str,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.get_note(owner_id, note_id)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Title is required. Other fields change only when sent.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.update_note(owner_id, note_id, data)
    return _note_response(note, request_id)


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(
    note_id: str,
    owner_id: CurrentUserId,
    service: Notes,
) -> None:
    await service.delete_note(owner_id, note_id)


@router.patch(
    "/{note_id}/pin",
    response_model=ApiResponse[NoteResponse],
    summary="Toggle pin",
)
async def toggle_pin(
    note_id: str,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.toggle_pin(owner_id, note_id)
    return _note_response(note, request_id)


@router.patch(
    "/{note_id}/archive",
    response_model=ApiResponse[NoteResponse],
    summary="Archive a note",
)
async def archive_note(
    note_id: str,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.archive_note(owner_id, note_id)
    return _note_response(note, request_id)


@router.patch(
    "/{note_id}/unarchive",
    response_model=ApiResponse[NoteResponse],
    summary="Unarchive a note",
)
async def unarchive_note(
    note_id: str,
    owner_id: CurrentUserId,
    service: Notes,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await service.unarchive_note(owner_id, note_id)
    return _note_response(note, request_id)
