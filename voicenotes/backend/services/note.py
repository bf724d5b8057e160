"""
Note Service.

Business logic layer for notes: CRUD, the trash lifecycle, and moving
notes between folders. All operations are scoped to the caller.

Lifecycle:
    ACTIVE --trash--> TRASHED --restore--> ACTIVE
    ACTIVE | TRASHED --delete permanently--> removed
"""

from sqlalchemy.ext.asyncio import AsyncSession

from voicenotes.backend.core.utils import utc_now
from voicenotes.backend.models.note import Note
from voicenotes.backend.repositories.folder import FolderRepository
from voicenotes.backend.repositories.note import NoteRepository
from voicenotes.backend.schemas.note import NoteCreate, NoteUpdate
from voicenotes.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    A missing note and a note owned by someone else raise the same
    NotFoundError("Note not found"); a bad target folder raises
    NotFoundError("Folder not found").
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.folder_repo = FolderRepository(session)

    async def _ensure_folder(self, user_id: str, folder_id: str) -> None:
        """Raise NotFoundError unless folder_id belongs to user_id."""
        await self.folder_repo.get_owned(folder_id, user_id)

    async def list_notes(
        self,
        user_id: str,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
        tag: str | None = None,
    ) -> list[Note]:
        """
        List the caller's notes, most recently updated first.

        Args:
            user_id: Caller identity
            include_deleted: Whether to include trashed notes
            folder_id: Only notes in this folder
            favorites_only: Only favorite notes
            tag: Only notes carrying this tag

        Returns:
            List of notes
        """
        notes = await self.repo.list_for_user(
            user_id,
            include_deleted=include_deleted,
            folder_id=folder_id,
            favorites_only=favorites_only,
        )
        if tag:
            notes = [note for note in notes if tag in (note.tags or [])]
        return notes

    async def search_notes(self, user_id: str, query: str, limit: int = 50) -> list[Note]:
        """Search the caller's active notes by title or content."""
        self._log_debug("Searching notes", user_id=user_id, query=query)
        return await self.repo.search(user_id, query, limit=limit)

    async def get_note(self, user_id: str, note_id: str) -> Note:
        """
        Get one of the caller's notes.

        Raises:
            NotFoundError: If the caller has no such note
        """
        return await self.repo.get_owned(note_id, user_id)

    async def create_note(self, user_id: str, data: NoteCreate) -> Note:
        """
        Create a new active note.

        Raises:
            ValidationError: If the title is blank
            NotFoundError: If folder_id is given but not owned by the caller
        """
        self._validate_required({"title": data.title}, ["title"])
        if data.folder_id is not None:
            await self._ensure_folder(user_id, data.folder_id)

        self._log_operation("Creating note", user_id=user_id, title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=data.title,
                content=data.content,
                audio_url=data.audio_url,
                has_audio=data.has_audio,
                tags=list(data.tags),
                is_favorite=data.is_favorite,
                folder_id=data.folder_id,
                is_deleted=False,
                updated_at=utc_now(),
                user_id=user_id,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update_note(self, user_id: str, note_id: str, data: NoteUpdate) -> Note:
        """
        Apply a partial update. updated_at is refreshed even when the
        payload is empty.

        Raises:
            NotFoundError: If the caller has no such note, or a supplied
                folder_id is not one of the caller's folders
        """
        note = await self.repo.get_owned(note_id, user_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("folder_id") is not None:
            await self._ensure_folder(user_id, update_data["folder_id"])

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        update_data["updated_at"] = utc_now()
        return await self._execute_db_operation(
            "update_note",
            self.repo.apply(note, **update_data),
        )

    async def _set_deleted(self, user_id: str, note_id: str, is_deleted: bool) -> Note:
        note = await self.repo.get_owned(note_id, user_id)
        return await self._execute_db_operation(
            "set_note_deleted",
            self.repo.apply(note, is_deleted=is_deleted, updated_at=utc_now()),
        )

    async def move_note_to_trash(self, user_id: str, note_id: str) -> Note:
        """
        Move a note to the trash. Trashing a trashed note is a no-op
        that still refreshes updated_at.

        Raises:
            NotFoundError: If the caller has no such note
        """
        self._log_operation("Moving note to trash", note_id=note_id)
        return await self._set_deleted(user_id, note_id, True)

    async def restore_note_from_trash(self, user_id: str, note_id: str) -> Note:
        """
        Restore a trashed note. Restoring an active note is a no-op
        that still refreshes updated_at.

        Raises:
            NotFoundError: If the caller has no such note
        """
        self._log_operation("Restoring note from trash", note_id=note_id)
        return await self._set_deleted(user_id, note_id, False)

    async def delete_note_permanently(self, user_id: str, note_id: str) -> None:
        """
        Remove a note for good, whether or not it is in the trash.

        Raises:
            NotFoundError: If the caller has no such note
        """
        note = await self.repo.get_owned(note_id, user_id)
        self._log_operation("Deleting note permanently", note_id=note_id)
        await self._execute_db_operation("delete_note", self.repo.remove(note))

    async def move_note_to_folder(
        self,
        user_id: str,
        note_id: str,
        folder_id: str | None,
    ) -> Note:
        """
        Put a note in a folder, or take it out of any folder with None.

        The note is looked up first, so a missing note wins over a missing
        folder. On a bad folder the note is left as it was.

        Raises:
            NotFoundError: "Note not found" or "Folder not found"
        """
        note = await self.repo.get_owned(note_id, user_id)
        if folder_id is not None:
            await self._ensure_folder(user_id, folder_id)

        self._log_operation("Moving note", note_id=note_id, folder_id=folder_id)
        return await self._execute_db_operation(
            "move_note",
            self.repo.apply(note, folder_id=folder_id, updated_at=utc_now()),
        )

    async def empty_trash(self, user_id: str) -> int:
        """
        Permanently delete every trashed note of the caller.

        Returns:
            Number of notes deleted
        """
        deleted = await self._execute_db_operation(
            "empty_trash",
            self.repo.delete_trashed(user_id),
        )
        self._log_operation("Trash emptied", user_id=user_id, deleted=deleted)
        return deleted
