"""
Security Utilities.

Password hashing (bcrypt) and the session token issuer (JWT via
python-jose). Session tokens have one fixed validity window taken from
security.yaml; there is no refresh token and no per-call expiry.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Any

import bcrypt
from jose import JWTError, jwt

from cloudnotes.backend.core.config import get_app_config, get_settings
from cloudnotes.backend.core.exceptions import InvalidSessionError
from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.core.utils import utc_now

logger = get_logger(__name__)

TOKEN_TYPE = "access"

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    rounds = get_app_config().security.password.bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


@lru_cache
def dummy_password_hash() -> str:
    """
    Hash compared against when a login names an unknown email.

    Keeps the unknown-email path as slow as the wrong-password path.
    """
    return hash_password("cloudnotes-no-such-user")


def session_lifetime() -> timedelta:
    """Validity window of every session token."""
    minutes = get_app_config().security.jwt.access_token_expire_minutes
    return timedelta(minutes=minutes)


def issue_session_token(user_id: str) -> str:
    """
    Issue a signed session token for a verified user.

    Args:
        user_id: Identity to encode in the ``sub`` claim

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt

    claims: dict[str, Any] = {
        "sub": str(user_id),
        "type": TOKEN_TYPE,
        "aud": jwt_config.audience,
        "exp": utc_now() + session_lifetime(),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=jwt_config.algorithm)


def resolve_session_token(token: str) -> str:
    """
    Verify a session token and return the user id it was issued for.

    Raises:
        InvalidSessionError: Bad signature, wrong audience, expired,
            malformed, or missing/invalid claims
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise InvalidSessionError()

    if payload.get("type") != TOKEN_TYPE:
        logger.warning("Token rejected", extra={"reason": "wrong token type"})
        raise InvalidSessionError()

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        logger.warning("Token rejected", extra={"reason": "missing subject"})
        raise InvalidSessionError()

    return user_id
