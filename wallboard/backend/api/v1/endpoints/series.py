"""
Series API Endpoints.
"""

from fastapi import APIRouter, Depends

from wallboard.backend.core.dependencies import Access, DbSession
from wallboard.backend.core.pagination import PaginationParams, get_pagination_params
from wallboard.backend.schemas.base import ApiResponse
from wallboard.backend.schemas.entry import EntryResponse
from wallboard.backend.schemas.series import (
    SeriesCreate,
    SeriesDetailResponse,
    SeriesItemCreate,
    SeriesItemResponse,
    SeriesReorder,
    SeriesResponse,
)
from wallboard.backend.services.series import SeriesService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[SeriesResponse]], summary="List series")
async def list_series(
    db: DbSession,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> ApiResponse[list[SeriesResponse]]:
    series = await SeriesService(db).list_series(limit=pagination.limit, offset=pagination.offset)
    return ApiResponse(data=[SeriesResponse.model_validate(s) for s in series])


@router.post(
    "",
    response_model=ApiResponse[SeriesResponse],
    status_code=201,
    summary="Create a series",
)
async def create_series(data: SeriesCreate, db: DbSession, access: Access) -> ApiResponse[SeriesResponse]:
    series = await SeriesService(db).create_series(data, access)
    return ApiResponse(data=SeriesResponse.model_validate(series))


@router.get(
    "/{series_id}",
    response_model=ApiResponse[SeriesDetailResponse],
    summary="Get a series with its entries",
)
async def get_series(series_id: str, db: DbSession, access: Access) -> ApiResponse[SeriesDetailResponse]:
    series, items = await SeriesService(db).get_series(series_id, access)
    detail = SeriesDetailResponse(
        id=series.id,
        name=series.name,
        description=series.description,
        created_at=series.created_at,
        items=[
            SeriesItemResponse(
                id=item.id,
                entry_kind=item.entry_kind,
                entry_id=item.entry_id,
                position=item.position,
                entry=EntryResponse.from_entry(item.entry_kind, entry),
            )
            for item, entry in items
        ],
    )
    return ApiResponse(data=detail)


@router.post(
    "/{series_id}/items",
    response_model=ApiResponse[SeriesItemResponse],
    status_code=201,
    summary="Append an entry to a series",
)
async def add_item(
    series_id: str,
    data: SeriesItemCreate,
    db: DbSession,
    access: Access,
) -> ApiResponse[SeriesItemResponse]:
    item = await SeriesService(db).add_item(series_id, data, access)
    return ApiResponse(
        data=SeriesItemResponse(
            id=item.id,
            entry_kind=item.entry_kind,
            entry_id=item.entry_id,
            position=item.position,
        )
    )


@router.post(
    "/{series_id}/reorder",
    response_model=ApiResponse[dict[str, int]],
    summary="Reorder series items",
)
async def reorder_items(
    series_id: str,
    data: SeriesReorder,
    db: DbSession,
    access: Access,
) -> ApiResponse[dict[str, int]]:
    updated = await SeriesService(db).reorder_items(series_id, data.ordered_item_ids, access)
    return ApiResponse(data={"updated": updated})


@router.delete("/{series_id}/items/{item_id}", status_code=204, summary="Remove a series item")
async def remove_item(series_id: str, item_id: str, db: DbSession, access: Access) -> None:
    await SeriesService(db).remove_item(series_id, item_id, access)


@router.delete("/{series_id}", status_code=204, summary="Delete a series")
async def delete_series(series_id: str, db: DbSession, access: Access) -> None:
    await SeriesService(db).delete_series(series_id, access)
