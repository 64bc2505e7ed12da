"""
Entries API Endpoints.

CRUD for board entries. The board key is part of the path:
/api/v1/boards/{board}/entries.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from wallboard.backend.core.dependencies import Access, DbSession, Moderator, RequestId
from wallboard.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from wallboard.backend.schemas.base import ApiResponse
from wallboard.backend.schemas.entry import EntryCreate, EntryResponse, EntryUpdate
from wallboard.backend.services.entry import EntryService

router = APIRouter()
drafts_router = APIRouter()


@router.get(
    "",
    summary="List entries",
    description="Public entries of a board: pinned first in pin order, then newest first.",
)
async def list_entries(
    board: str,
    db: DbSession,
    access: Access,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    wall: str | None = Query(default=None, description="Wall slug (wall board only)"),
) -> dict[str, Any]:
    service = EntryService(db)
    entries, total = await service.list_sorted(
        board,
        access,
        wall_slug=wall,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=[EntryResponse.from_entry(board, e) for e in entries],
        total=total,
        params=pagination,
        request_id=request_id,
    )


@router.post(
    "",
    response_model=ApiResponse[EntryResponse],
    status_code=201,
    summary="Create an entry",
    description="Requires the wall password except on the friends board, where posts are moderated.",
)
async def create_entry(
    board: str,
    data: EntryCreate,
    db: DbSession,
    access: Access,
    moderator: Moderator,
) -> ApiResponse[EntryResponse]:
    service = EntryService(db, moderator=moderator)
    entry = await service.create_entry(board, data, access)
    return ApiResponse(data=EntryResponse.from_entry(board, entry))


@router.get(
    "/{entry_id}",
    response_model=ApiResponse[EntryResponse],
    summary="Get an entry",
)
async def get_entry(
    board: str,
    entry_id: str,
    db: DbSession,
    access: Access,
) -> ApiResponse[EntryResponse]:
    entry = await EntryService(db).get_entry(board, entry_id, access)
    return ApiResponse(data=EntryResponse.from_entry(board, entry))


@router.patch(
    "/{entry_id}",
    response_model=ApiResponse[EntryResponse],
    summary="Update an entry",
    description="Only provided fields are updated. Pin state is managed by the pins endpoints.",
)
async def update_entry(
    board: str,
    entry_id: str,
    data: EntryUpdate,
    db: DbSession,
    access: Access,
) -> ApiResponse[EntryResponse]:
    entry = await EntryService(db).update_entry(board, entry_id, data, access)
    return ApiResponse(data=EntryResponse.from_entry(board, entry))


@router.delete(
    "/{entry_id}",
    status_code=204,
    summary="Delete an entry",
    description="Permanently delete an entry.",
)
async def delete_entry(
    board: str,
    entry_id: str,
    db: DbSession,
    access: Access,
) -> None:
    await EntryService(db).delete_entry(board, entry_id, access)


@drafts_router.get(
    "",
    response_model=ApiResponse[list[EntryResponse]],
    summary="List drafts",
    description="Draft wall entries, newest first. Requires the wall password.",
)
async def list_drafts(
    db: DbSession,
    access: Access,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> ApiResponse[list[EntryResponse]]:
    drafts = await EntryService(db).list_drafts(
        access,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return ApiResponse(data=[EntryResponse.from_entry("wall", d) for d in drafts])
