"""
FastAPI Dependencies.

Shared dependencies for request handling, including the access gate that
guards every note endpoint.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.database import get_db_session
from cloudnotes.backend.core.exceptions import AuthenticationError
from cloudnotes.backend.core.security import resolve_session_token

DbSession = Annotated[AsyncSession, Depends(get_db_session)]

# auto_error=False so a missing header reaches us and maps to our own 401
bearer_scheme = HTTPBearer(auto_error=False)


async def get_request_id(request: Request) -> str:
    """
    Request ID assigned by RequestContextMiddleware.

    Falls back to the X-Request-ID header, then a fresh id, when the
    middleware is not installed.
    """
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get("X-Request-ID") or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Resolve the bearer token into the id of the requesting owner.

    No header (or a non-Bearer scheme) raises AuthenticationError (401);
    a token that fails verification raises InvalidSessionError (403).
    Sessions are not cached: every request verifies its token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user_id = resolve_session_token(credentials.credentials)
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
