"""
Short Links API Endpoints.
"""

from fastapi import APIRouter, Header, Request

from wallboard.backend.core.dependencies import Access, DbSession, Shortener
from wallboard.backend.schemas.base import ApiResponse
from wallboard.backend.schemas.link import LinkCreate, LinkResponse, LinkTargetResponse
from wallboard.backend.services.short_links import (
    ShortLinkService,
    build_short_url,
    request_origin,
)
from wallboard.backend.services.shortener import share_url_for

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[LinkResponse],
    summary="Create or fetch a short link",
    description="Returns the entry's existing code when it has one.",
)
async def create_link(
    data: LinkCreate,
    request: Request,
    db: DbSession,
    access: Access,
    shortener: Shortener,
    x_forwarded_proto: str | None = Header(None),
) -> ApiResponse[LinkResponse]:
    link = await ShortLinkService(db).create_or_get_link(data.target_kind, data.target_id, access)

    host = request.headers.get("host")
    internal_url = build_short_url(link.code, request_origin(host, x_forwarded_proto))
    short_url, external = await share_url_for(shortener, internal_url, host)
    return ApiResponse(data=LinkResponse(code=link.code, short_url=short_url, external=external))


@router.get(
    "/{code}",
    response_model=ApiResponse[LinkTargetResponse],
    summary="Resolve a short code",
)
async def resolve_link(code: str, db: DbSession) -> ApiResponse[LinkTargetResponse]:
    target = await ShortLinkService(db).resolve(code)
    return ApiResponse(data=LinkTargetResponse(target_kind=target.kind, target_id=target.id))
