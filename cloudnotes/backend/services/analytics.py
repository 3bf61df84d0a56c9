"""
Analytics Service.

Global counters for the admin dashboard.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.repositories.note import NoteRepository
from cloudnotes.backend.repositories.user import UserRepository
from cloudnotes.backend.schemas.analytics import AnalyticsResponse
from cloudnotes.backend.services.base import BaseService


class AnalyticsService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.users = UserRepository(session)
        self.notes = NoteRepository(session)

    async def summary(self) -> AnalyticsResponse:
        """Count accounts and notes across every owner."""
        users = await self._execute_db_operation("count_users", self.users.count())
        counters = await self._execute_db_operation("count_notes", self.notes.counters())
        self._log_debug("Analytics computed", users=users, **counters)
        return AnalyticsResponse(users=users, **counters)
