"""
Custom Exceptions.

Application-specific exception classes. Each carries a stable error code
that the exception handlers put in the response body; the HTTP status is
decided by EXCEPTION_STATUS_MAP in exception_handlers.py.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found for the requesting owner."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthenticationError(ApplicationError):
    """Raised when a request carries no bearer credential."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class InvalidCredentialsError(ApplicationError):
    """Raised when login fails, whether the email or the password is wrong."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, code="AUTH_INVALID_CREDENTIALS")


class InvalidSessionError(ApplicationError):
    """Raised when a bearer token is malformed, tampered with, or expired."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message, code="AUTH_INVALID_SESSION")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
