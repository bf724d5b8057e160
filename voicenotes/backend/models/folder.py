"""
Folder Model.

Named, optionally colored grouping of a user's notes.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from voicenotes.backend.models.base import Base, CreatedAtMixin, UUIDMixin


class Folder(UUIDMixin, CreatedAtMixin, Base):
    """
    Folder database model.

    Belongs to exactly one user. Deleting a folder never deletes notes;
    their folder_id is cleared instead (see FolderService.delete_folder).
    """

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name!r})>"
