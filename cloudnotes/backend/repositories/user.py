"""
User Repository.

Data access for accounts. Email uniqueness is enforced by the table's
unique constraint; the service checks first to give a clean conflict.
"""

from sqlalchemy import select

from cloudnotes.backend.models.user import User
from cloudnotes.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None
