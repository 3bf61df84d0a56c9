"""
Base Repository.

Common persistence helpers. Deliberately has no unscoped get/update/delete
by id: note access always goes through owner-scoped queries.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository for a single model.

    Subclasses set the model class:

        class UserRepository(BaseRepository[User]):
            model = User
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """Insert a new row and return it with generated columns loaded."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        """Count rows matching all criteria."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(*criteria)
        )
        return result.scalar_one()
