"""
Folder Schemas.

Pydantic schemas for folder API request/response validation.
"""

from datetime import datetime

from pydantic import Field, field_validator

from voicenotes.backend.schemas.base import CamelModel


class FolderCreate(CamelModel):
    """Schema for creating a folder."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Folder name",
        examples=["Work"],
    )
    color: str | None = Field(
        default=None,
        max_length=32,
        description="Display color",
        examples=["#3b82f6"],
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value


class FolderUpdate(CamelModel):
    """Schema for renaming or recoloring a folder. Null color clears it."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def reject_null_or_blank_name(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Name cannot be null")
        if not value.strip():
            raise ValueError("Name is required")
        return value


class FolderResponse(CamelModel):
    """Schema for folder in API responses."""

    id: str
    name: str
    color: str | None
    created_at: datetime
