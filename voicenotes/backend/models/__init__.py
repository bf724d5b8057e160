# SQLAlchemy models package. Import every model here so metadata is complete.
from voicenotes.backend.models.base import Base
from voicenotes.backend.models.folder import Folder
from voicenotes.backend.models.note import Note
from voicenotes.backend.models.user import User

__all__ = ["Base", "Folder", "Note", "User"]
