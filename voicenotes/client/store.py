"""
Note Stores.

Storage interface used by client front ends. Two implementations share the
same lifecycle semantics:

- RemoteNoteStore: every operation goes through the notes API
- InMemoryNoteStore: notes and folders live in process (offline mode, tests),
  optionally snapshotted to a JSON file

The implementation is picked from configuration by create_note_store(),
never by falling back when the API fails.
"""

import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from voicenotes.backend.core.config import get_app_config, resolve_project_path
from voicenotes.backend.core.exceptions import NotFoundError, ValidationError
from voicenotes.backend.core.logging import get_logger, log_with_source
from voicenotes.backend.core.utils import normalize_tags, utc_now
from voicenotes.backend.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from voicenotes.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from voicenotes.client.api_client import NotesAPIClient, load_token

logger = get_logger(__name__)

STORE_KINDS = ("remote", "memory")


class NoteStore(ABC):
    """Note and folder operations available to a single signed-in user."""

    @abstractmethod
    async def list_notes(
        self,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
        tag: str | None = None,
    ) -> list[NoteResponse]:
        """Notes ordered by updated_at, newest first."""

    @abstractmethod
    async def search_notes(self, query: str, limit: int = 50) -> list[NoteResponse]:
        """Active notes whose title or content contains query (case-insensitive)."""

    @abstractmethod
    async def get_note(self, note_id: str) -> NoteResponse: ...

    @abstractmethod
    async def create_note(self, data: NoteCreate) -> NoteResponse: ...

    @abstractmethod
    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteResponse: ...

    @abstractmethod
    async def move_note_to_trash(self, note_id: str) -> NoteResponse: ...

    @abstractmethod
    async def restore_note_from_trash(self, note_id: str) -> NoteResponse: ...

    @abstractmethod
    async def move_note_to_folder(self, note_id: str, folder_id: str | None) -> NoteResponse: ...

    @abstractmethod
    async def delete_note_permanently(self, note_id: str) -> None: ...

    @abstractmethod
    async def empty_trash(self) -> int: ...

    @abstractmethod
    async def list_folders(self) -> list[FolderResponse]: ...

    @abstractmethod
    async def create_folder(self, data: FolderCreate) -> FolderResponse: ...

    @abstractmethod
    async def update_folder(self, folder_id: str, data: FolderUpdate) -> FolderResponse: ...

    @abstractmethod
    async def delete_folder(self, folder_id: str) -> None:
        """Delete a folder; its notes stay, unfiled."""

    async def close(self) -> None:
        """Release any resources held by the store."""


class RemoteNoteStore(NoteStore):
    """Note store backed by the notes API."""

    def __init__(self, client: NotesAPIClient) -> None:
        self.client = client

    async def list_notes(
        self,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
        tag: str | None = None,
    ) -> list[NoteResponse]:
        return await self.client.list_notes(
            include_deleted=include_deleted,
            folder_id=folder_id,
            favorites_only=favorites_only,
            tag=tag,
        )

    async def search_notes(self, query: str, limit: int = 50) -> list[NoteResponse]:
        return await self.client.search_notes(query, limit=limit)

    async def get_note(self, note_id: str) -> NoteResponse:
        return await self.client.get_note(note_id)

    async def create_note(self, data: NoteCreate) -> NoteResponse:
        return await self.client.create_note(data)

    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteResponse:
        return await self.client.update_note(note_id, data)

    async def move_note_to_trash(self, note_id: str) -> NoteResponse:
        return await self.client.move_note_to_trash(note_id)

    async def restore_note_from_trash(self, note_id: str) -> NoteResponse:
        return await self.client.restore_note_from_trash(note_id)

    async def move_note_to_folder(self, note_id: str, folder_id: str | None) -> NoteResponse:
        return await self.client.move_note_to_folder(note_id, folder_id)

    async def delete_note_permanently(self, note_id: str) -> None:
        await self.client.delete_note_permanently(note_id)

    async def empty_trash(self) -> int:
        return await self.client.empty_trash()

    async def list_folders(self) -> list[FolderResponse]:
        return await self.client.list_folders()

    async def create_folder(self, data: FolderCreate) -> FolderResponse:
        return await self.client.create_folder(data)

    async def update_folder(self, folder_id: str, data: FolderUpdate) -> FolderResponse:
        return await self.client.update_folder(folder_id, data)

    async def delete_folder(self, folder_id: str) -> None:
        await self.client.delete_folder(folder_id)

    async def close(self) -> None:
        await self.client.close()


class MemoryState(BaseModel):
    """Serialized contents of an InMemoryNoteStore."""

    notes: list[NoteResponse] = []
    folders: list[FolderResponse] = []


def memory_state_path() -> Path:
    """Location of the memory store snapshot, relative to the project root unless absolute."""
    return resolve_project_path(get_app_config().application.client.memory_file)


class InMemoryNoteStore(NoteStore):
    """
    Note store kept entirely in process.

    Follows the same rules as the backend: trashing and restoring are
    idempotent and refresh updated_at, an empty update still refreshes
    updated_at, deleting a folder unfiles its notes, and moving to an
    unknown folder leaves the note untouched.

    With a state_file the contents are loaded on creation and written back
    on close(), so one-shot CLI invocations see each other's changes.
    """

    def __init__(self, state_file: Path | None = None) -> None:
        self.state_file = state_file
        self._notes: dict[str, NoteResponse] = {}
        self._folders: dict[str, FolderResponse] = {}
        if state_file is not None and state_file.exists():
            state = MemoryState.model_validate_json(state_file.read_text(encoding="utf-8"))
            self._notes = {note.id: note for note in state.notes}
            self._folders = {folder.id: folder for folder in state.folders}

    async def close(self) -> None:
        if self.state_file is None:
            return
        state = MemoryState(notes=list(self._notes.values()), folders=list(self._folders.values()))
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        self.state_file.write_text(state.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    def _note(self, note_id: str) -> NoteResponse:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    def _folder(self, folder_id: str) -> FolderResponse:
        folder = self._folders.get(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")
        return folder

    @staticmethod
    def _require_name(name: str | None) -> None:
        if name is None or not name.strip():
            raise ValidationError("name is required", details={"missing_fields": ["name"]})

    def _save(self, note: NoteResponse, **changes) -> NoteResponse:
        changes["updated_at"] = utc_now()
        updated = note.model_copy(update=changes, deep=True)
        self._notes[note.id] = updated
        return updated.model_copy(deep=True)

    async def list_notes(
        self,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
        tag: str | None = None,
    ) -> list[NoteResponse]:
        notes = [
            note
            for note in self._notes.values()
            if (include_deleted or not note.is_deleted)
            and (folder_id is None or note.folder_id == folder_id)
            and (not favorites_only or note.is_favorite)
            and (tag is None or tag in note.tags)
        ]
        notes.sort(key=lambda note: note.id)
        notes.sort(key=lambda note: note.updated_at, reverse=True)
        return [note.model_copy(deep=True) for note in notes]

    async def search_notes(self, query: str, limit: int = 50) -> list[NoteResponse]:
        needle = query.lower()
        matches = [
            note
            for note in await self.list_notes()
            if needle in note.title.lower() or needle in (note.content or "").lower()
        ]
        return matches[:limit]

    async def get_note(self, note_id: str) -> NoteResponse:
        return self._note(note_id).model_copy(deep=True)

    async def create_note(self, data: NoteCreate) -> NoteResponse:
        if not data.title or not data.title.strip():
            raise ValidationError("title is required", details={"missing_fields": ["title"]})
        if data.folder_id is not None:
            self._folder(data.folder_id)

        note = NoteResponse(
            id=str(uuid.uuid4()),
            title=data.title,
            content=data.content,
            audio_url=data.audio_url,
            has_audio=data.has_audio,
            tags=normalize_tags(data.tags),
            updated_at=utc_now(),
            is_favorite=data.is_favorite,
            folder_id=data.folder_id,
            is_deleted=False,
        )
        self._notes[note.id] = note
        log_with_source(logger, "client", "debug", "Note created in memory", note_id=note.id)
        return note.model_copy(deep=True)

    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteResponse:
        note = self._note(note_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("folder_id") is not None:
            self._folder(changes["folder_id"])
        if "tags" in changes:
            changes["tags"] = normalize_tags(changes["tags"])
        return self._save(note, **changes)

    async def move_note_to_trash(self, note_id: str) -> NoteResponse:
        return self._save(self._note(note_id), is_deleted=True)

    async def restore_note_from_trash(self, note_id: str) -> NoteResponse:
        return self._save(self._note(note_id), is_deleted=False)

    async def move_note_to_folder(self, note_id: str, folder_id: str | None) -> NoteResponse:
        note = self._note(note_id)
        if folder_id is not None:
            self._folder(folder_id)
        return self._save(note, folder_id=folder_id)

    async def delete_note_permanently(self, note_id: str) -> None:
        self._note(note_id)
        del self._notes[note_id]

    async def empty_trash(self) -> int:
        trashed = [note_id for note_id, note in self._notes.items() if note.is_deleted]
        for note_id in trashed:
            del self._notes[note_id]
        return len(trashed)

    async def list_folders(self) -> list[FolderResponse]:
        folders = sorted(self._folders.values(), key=lambda folder: (folder.created_at, folder.id))
        return [folder.model_copy(deep=True) for folder in folders]

    async def create_folder(self, data: FolderCreate) -> FolderResponse:
        self._require_name(data.name)
        folder = FolderResponse(
            id=str(uuid.uuid4()),
            name=data.name,
            color=data.color,
            created_at=utc_now(),
        )
        self._folders[folder.id] = folder
        return folder.model_copy(deep=True)

    async def update_folder(self, folder_id: str, data: FolderUpdate) -> FolderResponse:
        folder = self._folder(folder_id)
        changes = data.model_dump(exclude_unset=True)
        if "name" in changes:
            self._require_name(changes["name"])
        updated = folder.model_copy(update=changes)
        self._folders[folder_id] = updated
        return updated.model_copy(deep=True)

    async def delete_folder(self, folder_id: str) -> None:
        self._folder(folder_id)
        for note_id, note in list(self._notes.items()):
            if note.folder_id == folder_id:
                self._notes[note_id] = note.model_copy(update={"folder_id": None})
        del self._folders[folder_id]


def create_note_store(
    kind: str | None = None,
    token: str | None = None,
    frontend: str = "client",
    state_file: Path | None = None,
) -> NoteStore:
    """
    Build the note store selected by client.store in application.yaml.

    Args:
        kind: "remote" or "memory"; overrides configuration when given
        token: Bearer token for the remote store; defaults to the saved token
        frontend: X-Frontend-ID sent by the remote store
        state_file: Snapshot file for the memory store; none keeps it in process only

    Raises:
        ValueError: If kind is not a known store
    """
    kind = kind or get_app_config().application.client.store
    if kind == "memory":
        return InMemoryNoteStore(state_file=state_file)
    if kind == "remote":
        return RemoteNoteStore(NotesAPIClient(token=token or load_token(), frontend=frontend))
    raise ValueError(f"Unknown note store {kind!r}; expected one of {', '.join(STORE_KINDS)}")
