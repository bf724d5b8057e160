"""
User Model.

Account that owns folders and notes.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from voicenotes.backend.models.base import Base, CreatedAtMixin, UUIDMixin


class User(UUIDMixin, CreatedAtMixin, Base):
    """User account. Email is unique; only the password hash is stored."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
