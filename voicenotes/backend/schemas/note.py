"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import Field, field_validator

from voicenotes.backend.core.utils import normalize_tags
from voicenotes.backend.schemas.base import CamelModel


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Shopping list"],
    )
    content: str | None = Field(
        default=None,
        description="Note body; formatting markup is stored as-is",
        examples=["<b>Milk</b>, eggs"],
    )
    audio_url: str | None = Field(
        default=None,
        description="Reference to the recorded audio",
    )
    has_audio: bool = Field(default=False, description="Whether audio is attached")
    tags: list[str] = Field(default_factory=list, description="Tag labels")
    is_favorite: bool = Field(default=False, description="Favorite flag")
    folder_id: str | None = Field(default=None, description="Containing folder")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)

    @field_validator("folder_id")
    @classmethod
    def empty_folder_is_none(cls, value: str | None) -> str | None:
        return value or None


class NoteUpdate(CamelModel):
    """
    Schema for updating an existing note.

    Only fields present in the payload are applied. Sending null is only
    allowed for the nullable columns (content, audioUrl, folderId).
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    audio_url: str | None = None
    has_audio: bool | None = None
    tags: list[str] | None = None
    is_favorite: bool | None = None
    folder_id: str | None = None

    @field_validator("title", "has_audio", "tags", "is_favorite")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)

    @field_validator("folder_id")
    @classmethod
    def empty_folder_is_none(cls, value: str | None) -> str | None:
        return value or None


class NoteMove(CamelModel):
    """Target folder for a move; null or missing means "no folder"."""

    folder_id: str | None = Field(default=None, description="Target folder")

    @field_validator("folder_id")
    @classmethod
    def empty_folder_is_none(cls, value: str | None) -> str | None:
        return value or None


class NoteResponse(CamelModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str
    content: str | None
    audio_url: str | None
    has_audio: bool
    tags: list[str]
    updated_at: datetime = Field(description="Last update timestamp")
    is_favorite: bool
    folder_id: str | None
    is_deleted: bool = Field(description="Whether the note is in the trash")


class TrashEmptied(CamelModel):
    """Result of emptying the trash."""

    deleted: int
