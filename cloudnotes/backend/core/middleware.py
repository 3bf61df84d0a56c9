"""
Request Context Middleware.

Request tracking, timing and structlog context propagation.
"""

import uuid
from datetime import datetime, timezone

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cloudnotes.backend.core.logging import get_logger

logger = get_logger(__name__)


def _elapsed_ms(start_time: datetime) -> int:
    end_time = datetime.now(timezone.utc).replace(tzinfo=None)
    return int((end_time - start_time).total_seconds() * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Adds request context to every request.

    - Generates or propagates the request ID (X-Request-ID header)
    - Records request timing (X-Response-Time header)
    - Binds request_id, method and path to structlog for every log line
      emitted while the request is handled
    - Stores request_id and start_time in request.state

    With ``log_requests`` enabled each completed request is logged at
    INFO, otherwise at DEBUG.
    """

    def __init__(self, app: ASGIApp, log_requests: bool = False) -> None:
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = datetime.now(timezone.utc).replace(tzinfo=None)

        request.state.request_id = request_id
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)

            duration_ms = _elapsed_ms(start_time)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            log = logger.info if self.log_requests else logger.debug
            log(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response

        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": _elapsed_ms(start_time),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()
