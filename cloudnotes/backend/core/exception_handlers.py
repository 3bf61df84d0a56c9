"""
Exception Handlers.

FastAPI exception handlers that turn application exceptions into the
standard ErrorResponse body. Client errors are logged at warning level,
server errors at error level; server errors never expose internals.

Usage:
    from cloudnotes.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cloudnotes.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    DatabaseError,
    InvalidCredentialsError,
    InvalidSessionError,
    NotFoundError,
    ValidationError,
)
from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    InvalidCredentialsError: 401,
    InvalidSessionError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    DatabaseError: 500,
}

GENERIC_SERVER_MESSAGE = "An unexpected error occurred"


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_response(
    status_code: int,
    detail: ErrorDetail,
    request_id: str | None,
) -> JSONResponse:
    response = ErrorResponse(error=detail, metadata=ResponseMetadata(request_id=request_id))
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
        headers=headers,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Convert an ApplicationError subclass to its mapped status and body."""
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
        error_detail = ErrorDetail(code=exc.code, message=GENERIC_SERVER_MESSAGE)
    else:
        logger.warning("Client error", extra=log_extra)
        error_detail = ErrorDetail(code=exc.code, message=exc.message)
        if isinstance(exc, ValidationError) and exc.details:
            error_detail.details = exc.details

    return _error_response(status_code, error_detail, request_id)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Malformed bodies and missing required fields are client errors and
    answer 400, the same status as a service-level ValidationError.
    """
    request_id = _get_request_id(request)

    errors = exc.errors()
    details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in errors
        ]
    }

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    error_detail = ErrorDetail(
        code="VAL_REQUEST_INVALID",
        message="Request validation failed",
        details=details,
    )
    return _error_response(400, error_detail, request_id)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the full traceback and answer a generic 500."""
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    error_detail = ErrorDetail(code="SYS_INTERNAL_ERROR", message=GENERIC_SERVER_MESSAGE)
    return _error_response(500, error_detail, request_id)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
