"""
Auth Schemas.

Request/response models for signup and login.
"""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from cloudnotes.backend.core.security import BCRYPT_MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return value


def _check_email(value: str) -> str:
    # Validate only; the address is kept exactly as given, domain case included
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_bytes)]
Email = Annotated[str, AfterValidator(_check_email)]


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    email: Email = Field(description="Account email", examples=["ada@example.com"])
    password: Password = Field(description="Account password")


class LoginRequest(BaseModel):
    """Schema for obtaining a session token."""

    email: Email
    password: Password


class UserResponse(BaseModel):
    """Public view of an account. Never carries the password hash."""

    id: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Session token issued at login."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
