"""
Base Repository.

Base class for all repositories with common CRUD operations.
Lookups for user-owned rows always filter on the owner as well as the
primary key, so a row belonging to another user reads as missing.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from voicenotes.backend.core.exceptions import NotFoundError
from voicenotes.backend.core.logging import get_logger
from voicenotes.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class FolderRepository(BaseRepository[Folder]):
            model = Folder
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    def _label(self) -> str:
        return self.model.__name__

    def _owned(self, user_id: str) -> Select:
        """Base query restricted to rows owned by user_id."""
        return select(self.model).where(self.model.user_id == user_id)

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def get_owned(self, id: str, user_id: str) -> ModelType:
        """
        Get a record by ID that belongs to user_id.

        Raises:
            NotFoundError: If the record does not exist or has another owner
        """
        instance = await self.get_owned_or_none(id, user_id)
        if instance is None:
            raise NotFoundError(f"{self._label} not found")
        return instance

    async def get_owned_or_none(self, id: str, user_id: str) -> ModelType | None:
        """Get a record by ID that belongs to user_id, or None."""
        result = await self.session.execute(
            self._owned(user_id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def apply(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Set the given attributes on an already loaded record and flush."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def remove(self, instance: ModelType) -> None:
        """Delete an already loaded record."""
        await self.session.delete(instance)
        await self.session.flush()
