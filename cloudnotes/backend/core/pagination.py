"""
Pagination Utilities.

Optional limit/offset pagination for list endpoints. When ``limit`` is
omitted the full result is returned, which is the default contract of
the notes listing. Ordering stability is the caller's responsibility
(the note listing ends its ORDER BY with the primary key).
"""

from dataclasses import dataclass

from fastapi import Query

from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.exceptions import ValidationError


@dataclass(frozen=True)
class PaginationParams:
    """Pagination parameters extracted from the query string."""

    limit: int | None
    offset: int


def get_pagination_params(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of items to return (all when omitted)",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of items to skip",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PaginationParams = Depends(get_pagination_params),
        ):
            ...
    """
    max_limit = get_app_config().application.pagination.max_limit
    if limit is not None and limit > max_limit:
        raise ValidationError(
            "limit too large",
            details={"limit": f"Maximum is {max_limit}"},
        )
    return PaginationParams(limit=limit, offset=offset)
