"""
Auth API Endpoints.

Signup and login. Both are public; every other v1 route requires the
session token that login returns.
"""

from fastapi import APIRouter

from cloudnotes.backend.core.dependencies import DbSession, RequestId
from cloudnotes.backend.schemas.auth import (
    LoginRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from cloudnotes.backend.schemas.base import ApiResponse, ResponseMetadata
from cloudnotes.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/signup",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Create an account",
    description="Register an email and password. The email must not be taken.",
)
async def signup(
    data: SignupRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[UserResponse]:
    service = AuthService(db)
    user = await service.signup(data)
    return ApiResponse(
        data=UserResponse.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in",
    description="Exchange email and password for a bearer session token.",
)
async def login(
    data: LoginRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TokenResponse]:
    service = AuthService(db)
    token = await service.login(data)
    return ApiResponse(data=token, metadata=ResponseMetadata(request_id=request_id))
