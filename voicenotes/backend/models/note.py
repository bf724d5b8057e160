"""
Note Model.

Database model for notes, including the soft-delete (trash) flag.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from voicenotes.backend.core.utils import utc_now
from voicenotes.backend.models.base import Base, UUIDMixin

# Native text[] on PostgreSQL, JSON list elsewhere (SQLite in tests)
TagList = ARRAY(String).with_variant(JSON(), "sqlite")


class Note(UUIDMixin, Base):
    """
    Note database model.

    is_deleted marks a note as trashed; the row is only removed by an
    explicit permanent delete. updated_at is set by the service layer on
    every mutation so that no-op trash/restore calls still refresh it.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    audio_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_audio: Mapped[bool] = mapped_column(default=False, nullable=False)
    tags: Mapped[list[str]] = mapped_column(TagList, default=list, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )
    is_favorite: Mapped[bool] = mapped_column(default=False, nullable=False)
    folder_id: Mapped[str | None] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_deleted: Mapped[bool] = mapped_column(default=False, nullable=False)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, is_deleted={self.is_deleted})>"
