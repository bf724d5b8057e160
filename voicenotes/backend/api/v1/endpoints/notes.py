"""
Notes API Endpoints.

REST API endpoints for note management and the trash lifecycle.
All routes require a bearer token and only ever touch the caller's notes.
"""

from fastapi import APIRouter, Query

from voicenotes.backend.core.config import get_app_config
from voicenotes.backend.core.dependencies import CurrentUser, DbSession, RequestId
from voicenotes.backend.core.exceptions import NotFoundError
from voicenotes.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from voicenotes.backend.schemas.note import (
    NoteCreate,
    NoteMove,
    NoteResponse,
    NoteUpdate,
    TrashEmptied,
)
from voicenotes.backend.services.note import NoteService

router = APIRouter()


def _note_response(note, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description="List the caller's notes, most recently updated first.",
)
async def list_notes(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    include_deleted: bool = Query(
        default=False,
        alias="includeDeleted",
        description="Include notes in the trash",
    ),
    folder_id: str | None = Query(
        default=None,
        alias="folderId",
        description="Only notes in this folder",
    ),
    favorites: bool = Query(default=False, description="Only favorite notes"),
    tag: str | None = Query(default=None, description="Only notes with this tag"),
) -> ApiResponse[list[NoteResponse]]:
    """List notes."""
    notes = await NoteService(db).list_notes(
        user.id,
        include_deleted=include_deleted,
        folder_id=folder_id,
        favorites_only=favorites,
        tag=tag,
    )
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Search notes",
    description="Search active notes by title or content.",
)
async def search_notes(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    q: str = Query(..., min_length=1, max_length=100, description="Search query"),
    limit: int = Query(default=50, ge=1, le=100, description="Maximum number of results"),
) -> ApiResponse[list[NoteResponse]]:
    """Search notes."""
    if not get_app_config().features.notes_search_enabled:
        raise NotFoundError("Search is disabled")

    notes = await NoteService(db).search_notes(user.id, q, limit=limit)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/trash",
    response_model=ApiResponse[TrashEmptied],
    summary="Empty the trash",
    description="Permanently delete every note in the caller's trash.",
)
async def empty_trash(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TrashEmptied]:
    """Empty the trash."""
    deleted = await NoteService(db).empty_trash(user.id)
    return ApiResponse(
        data=TrashEmptied(deleted=deleted),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = await NoteService(db).get_note(user.id, note_id)
    return _note_response(note, request_id)


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
)
async def create_note(
    data: NoteCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = await NoteService(db).create_note(user.id, data)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update a note. Only provided fields are changed; updatedAt always moves.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = await NoteService(db).update_note(user.id, note_id, data)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}/trash",
    response_model=ApiResponse[NoteResponse],
    summary="Move a note to the trash",
)
async def move_note_to_trash(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Soft-delete a note."""
    note = await NoteService(db).move_note_to_trash(user.id, note_id)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}/restore",
    response_model=ApiResponse[NoteResponse],
    summary="Restore a note from the trash",
)
async def restore_note_from_trash(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore a trashed note."""
    note = await NoteService(db).restore_note_from_trash(user.id, note_id)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}/move",
    response_model=ApiResponse[NoteResponse],
    summary="Move a note to a folder",
    description="Set the note's folder; null takes it out of any folder.",
)
async def move_note_to_folder(
    note_id: str,
    data: NoteMove,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Move a note to a folder."""
    note = await NoteService(db).move_note_to_folder(user.id, note_id, data.folder_id)
    return _note_response(note, request_id)


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a note permanently",
)
async def delete_note_permanently(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    """Permanently delete a note."""
    await NoteService(db).delete_note_permanently(user.id, note_id)
    return ApiResponse(
        data=MessageResponse(message="Note deleted permanently"),
        metadata=ResponseMetadata(request_id=request_id),
    )
