"""
Admin API Endpoints.

Global usage counters. Served only when features.admin_analytics_enabled
is on; otherwise the route answers 404 as if it did not exist, even to
callers without a session.
"""

from fastapi import APIRouter, Depends

from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from cloudnotes.backend.core.exceptions import NotFoundError
from cloudnotes.backend.schemas.analytics import AnalyticsResponse
from cloudnotes.backend.schemas.base import ApiResponse, ResponseMetadata
from cloudnotes.backend.services.analytics import AnalyticsService

router = APIRouter()


async def require_analytics_enabled() -> None:
    """Hide the route unless the analytics feature flag is on."""
    if not get_app_config().features.admin_analytics_enabled:
        raise NotFoundError()


# Route-level dependencies resolve before parameter dependencies, so the
# flag is checked ahead of the access gate.
@router.get(
    "/analytics",
    response_model=ApiResponse[AnalyticsResponse],
    summary="Usage counters",
    dependencies=[Depends(require_analytics_enabled)],
)
async def analytics(
    user_id: CurrentUserId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AnalyticsResponse]:
    service = AnalyticsService(db)
    summary = await service.summary()
    return ApiResponse(data=summary, metadata=ResponseMetadata(request_id=request_id))
