"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(request: Request) -> dict[str, Any]:
    """
    Run a trivial query through the application's database handle.

    Returns:
        Dict with status, latency, and optional error message
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        return {"status": "not_configured"}

    start = utc_now()
    try:
        async with database.session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": type(e).__name__}

    latency_ms = int((utc_now() - start).total_seconds() * 1000)
    return {"status": "healthy", "latency_ms": latency_ms}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    No dependency checks; this endpoint should always respond quickly.
    """
    return {"status": "ok", "timestamp": utc_now().isoformat()}


@router.get("/health/ready", response_model=None)
async def readiness_check(request: Request) -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 503 when the database does not answer.
    """
    checks = {"database": await check_database(request)}
    body = {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

    if checks["database"]["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        body["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=body)

    return body
