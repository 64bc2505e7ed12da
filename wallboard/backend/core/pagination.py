"""
Pagination Utilities.

Offset-based pagination for list endpoints. Limits come from
application.yaml (pagination.default_limit / max_limit).
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Query

from wallboard.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata


@dataclass
class PaginationParams:
    """Pagination parameters extracted from query string."""

    limit: int
    offset: int


def get_pagination_params(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of items to return",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of items to skip",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    A missing limit takes the configured default; a limit above the
    configured maximum is clamped to it.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PaginationParams = Depends(get_pagination_params),
        ):
            ...
    """
    from wallboard.backend.core.config import get_app_config

    config = get_app_config().application.pagination
    effective = config.default_limit if limit is None else min(limit, config.max_limit)
    return PaginationParams(limit=effective, offset=offset)


def create_paginated_response(
    items: list[Any],
    total: int | None,
    params: PaginationParams,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Items must already be serializable (pydantic models or plain dicts).

    Usage:
        return create_paginated_response(
            items=[EntryResponse.from_entry(board, e) for e in entries],
            total=total,
            params=pagination,
            request_id=request_id,
        )
    """
    has_more = total is not None and (params.offset + len(items)) < total

    response = PaginatedResponse[Any](
        data=items,
        pagination=PaginationInfo(
            total=total,
            limit=params.limit,
            offset=params.offset,
            has_more=has_more,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return response.model_dump(mode="json")
