"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model, always scoped to the owning user.
"""

from sqlalchemy import delete, or_, update

from voicenotes.backend.models.note import Note
from voicenotes.backend.repositories.base import BaseRepository

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so text matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits owner-scoped lookups from BaseRepository and adds
    note-specific queries.
    """

    model = Note

    async def list_for_user(
        self,
        user_id: str,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
    ) -> list[Note]:
        """
        Get a user's notes, most recently updated first.

        Args:
            user_id: Owner of the notes
            include_deleted: Whether to include trashed notes
            folder_id: Only notes in this folder
            favorites_only: Only notes marked as favorite

        Returns:
            List of notes
        """
        query = self._owned(user_id)
        if not include_deleted:
            query = query.where(Note.is_deleted == False)  # noqa: E712
        if folder_id is not None:
            query = query.where(Note.folder_id == folder_id)
        if favorites_only:
            query = query.where(Note.is_favorite == True)  # noqa: E712

        result = await self.session.execute(
            query.order_by(Note.updated_at.desc(), Note.id.asc())
        )
        return list(result.scalars().all())

    async def search(self, user_id: str, query: str, limit: int = 50) -> list[Note]:
        """
        Search a user's active notes by title or content (case-insensitive).

        The query is matched literally; % and _ are not wildcards.

        Args:
            user_id: Owner of the notes
            query: Search query string
            limit: Maximum number of results
        """
        pattern = f"%{escape_like(query)}%"
        result = await self.session.execute(
            self._owned(user_id)
            .where(Note.is_deleted == False)  # noqa: E712
            .where(
                or_(
                    Note.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Note.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Note.updated_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def unlink_folder(self, user_id: str, folder_id: str) -> int:
        """
        Clear folder_id on every note of user_id that points at folder_id.

        Returns:
            Number of notes unlinked
        """
        result = await self.session.execute(
            update(Note)
            .where(Note.user_id == user_id)
            .where(Note.folder_id == folder_id)
            .values(folder_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete_trashed(self, user_id: str) -> int:
        """
        Permanently delete every trashed note of user_id.

        Returns:
            Number of notes deleted
        """
        result = await self.session.execute(
            delete(Note)
            .where(Note.user_id == user_id)
            .where(Note.is_deleted == True)  # noqa: E712
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

