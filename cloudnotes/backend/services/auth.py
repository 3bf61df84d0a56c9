"""
Auth Service.

Account creation and credential verification. Login hands a verified
user to the session issuer in core/security.py.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.exceptions import ConflictError, InvalidCredentialsError
from cloudnotes.backend.core.security import (
    dummy_password_hash,
    hash_password,
    issue_session_token,
    session_lifetime,
    verify_password,
)
from cloudnotes.backend.models.user import User
from cloudnotes.backend.repositories.user import UserRepository
from cloudnotes.backend.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from cloudnotes.backend.services.base import BaseService

EMAIL_TAKEN = "Email already registered"


class AuthService(BaseService):
    """Service for signup and login."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def signup(self, data: SignupRequest) -> User:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.repo.exists_by_email(data.email):
            raise ConflictError(EMAIL_TAKEN)

        self._log_operation("Creating account")
        user = await self._execute_db_operation(
            "signup",
            self.repo.create(
                email=data.email,
                password_hash=hash_password(data.password),
            ),
        )
        self._log_debug("Account created", user_id=user.id)
        return user

    async def verify(self, email: str, password: str) -> User:
        """
        Check a password against the stored hash.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password; the
                caller cannot tell which
        """
        user = await self.repo.get_by_email(email)
        if user is None:
            verify_password(password, dummy_password_hash())
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user

    async def login(self, data: LoginRequest) -> TokenResponse:
        """Verify credentials and issue a session token."""
        user = await self.verify(data.email, data.password)
        self._log_operation("Login succeeded", user_id=user.id)
        return TokenResponse(
            token=issue_session_token(user.id),
            expires_in=int(session_lifetime().total_seconds()),
        )
