"""
Folder Service.

Business logic for folders. Every operation is scoped to the caller;
folders of other users behave exactly like folders that do not exist.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from voicenotes.backend.models.folder import Folder
from voicenotes.backend.repositories.folder import FolderRepository
from voicenotes.backend.repositories.note import NoteRepository
from voicenotes.backend.schemas.folder import FolderCreate, FolderUpdate
from voicenotes.backend.services.base import BaseService


class FolderService(BaseService):
    """Service for folder business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = FolderRepository(session)
        self.note_repo = NoteRepository(session)

    async def list_folders(self, user_id: str) -> list[Folder]:
        """List the caller's folders, oldest first."""
        return await self.repo.list_for_user(user_id)

    async def create_folder(self, user_id: str, data: FolderCreate) -> Folder:
        """
        Create a folder owned by the caller.

        Raises:
            ValidationError: If the name is blank
        """
        self._validate_required({"name": data.name}, ["name"])
        self._log_operation("Creating folder", user_id=user_id, name=data.name)

        folder = await self._execute_db_operation(
            "create_folder",
            self.repo.create(name=data.name, color=data.color, user_id=user_id),
        )

        self._log_debug("Folder created", folder_id=folder.id)
        return folder

    async def update_folder(
        self,
        user_id: str,
        folder_id: str,
        data: FolderUpdate,
    ) -> Folder:
        """
        Rename or recolor a folder. Absent fields are left unchanged.

        Raises:
            NotFoundError: If the caller has no such folder
            ValidationError: If a supplied name is blank
        """
        folder = await self.repo.get_owned(folder_id, user_id)
        update_data = data.model_dump(exclude_unset=True)

        if "name" in update_data:
            self._validate_required(update_data, ["name"])

        if not update_data:
            return folder

        self._log_operation(
            "Updating folder",
            folder_id=folder_id,
            fields=list(update_data.keys()),
        )
        return await self._execute_db_operation(
            "update_folder",
            self.repo.apply(folder, **update_data),
        )

    async def delete_folder(self, user_id: str, folder_id: str) -> None:
        """
        Delete a folder, first detaching every note that was in it.

        Both steps run in the caller's transaction, so a failure in either
        leaves the folder and its notes untouched.

        Raises:
            NotFoundError: If the caller has no such folder
        """
        folder = await self.repo.get_owned(folder_id, user_id)

        unlinked = await self._execute_db_operation(
            "unlink_folder_notes",
            self.note_repo.unlink_folder(user_id, folder.id),
        )
        await self._execute_db_operation("delete_folder", self.repo.remove(folder))

        self._log_operation(
            "Folder deleted",
            folder_id=folder_id,
            unlinked_notes=unlinked,
        )
