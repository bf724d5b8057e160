"""
Folder Repository.

Data access layer for folders, always scoped to the owning user.
"""

from voicenotes.backend.models.folder import Folder
from voicenotes.backend.repositories.base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Repository for Folder model."""

    model = Folder

    async def list_for_user(self, user_id: str) -> list[Folder]:
        """Get all folders of a user, oldest first."""
        result = await self.session.execute(
            self._owned(user_id).order_by(Folder.created_at.asc(), Folder.id.asc())
        )
        return list(result.scalars().all())
