"""
Folders API Endpoints.

REST API endpoints for folder management. All routes require a bearer token.
"""

from fastapi import APIRouter

from voicenotes.backend.core.dependencies import CurrentUser, DbSession, RequestId
from voicenotes.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from voicenotes.backend.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from voicenotes.backend.services.folder import FolderService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[FolderResponse]],
    summary="List folders",
    description="List the caller's folders, oldest first.",
)
async def list_folders(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FolderResponse]]:
    """List folders."""
    folders = await FolderService(db).list_folders(user.id)
    return ApiResponse(
        data=[FolderResponse.model_validate(folder) for folder in folders],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[FolderResponse],
    status_code=201,
    summary="Create a folder",
)
async def create_folder(
    data: FolderCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FolderResponse]:
    """Create a folder."""
    folder = await FolderService(db).create_folder(user.id, data)
    return ApiResponse(
        data=FolderResponse.model_validate(folder),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{folder_id}",
    response_model=ApiResponse[FolderResponse],
    summary="Update a folder",
    description="Rename or recolor a folder. Only provided fields are updated.",
)
async def update_folder(
    folder_id: str,
    data: FolderUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FolderResponse]:
    """Update a folder."""
    folder = await FolderService(db).update_folder(user.id, folder_id, data)
    return ApiResponse(
        data=FolderResponse.model_validate(folder),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{folder_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a folder",
    description="Delete a folder. Its notes are kept and moved out of it.",
)
async def delete_folder(
    folder_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    """Delete a folder."""
    await FolderService(db).delete_folder(user.id, folder_id)
    return ApiResponse(
        data=MessageResponse(message="Folder deleted successfully"),
        metadata=ResponseMetadata(request_id=request_id),
    )
