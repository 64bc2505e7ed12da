"""
Pins API Endpoints.

/api/v1/boards/{board}/pins
"""

from fastapi import APIRouter

from wallboard.backend.core.dependencies import Access, DbSession
from wallboard.backend.schemas.base import ApiResponse
from wallboard.backend.schemas.pin import (
    PinRequest,
    PinStateResponse,
    ReorderRequest,
    ReorderResponse,
)
from wallboard.backend.services.pins import PinService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[PinStateResponse],
    summary="Pin or unpin an entry",
    description="Pinning appends to the end of the pinned sequence; pinning a pinned entry is a no-op.",
)
async def set_pinned(
    board: str,
    data: PinRequest,
    db: DbSession,
    access: Access,
) -> ApiResponse[PinStateResponse]:
    entry = await PinService(db).set_pinned(board, data.id, data.pin, access)
    return ApiResponse(
        data=PinStateResponse(id=entry.id, is_pinned=entry.is_pinned, pin_order=entry.pin_order)
    )


@router.post(
    "/reorder",
    response_model=ApiResponse[ReorderResponse],
    summary="Reorder pinned entries",
    description="Each listed entry is pinned with pin_order equal to its position in the list.",
)
async def reorder_pins(
    board: str,
    data: ReorderRequest,
    db: DbSession,
    access: Access,
) -> ApiResponse[ReorderResponse]:
    updated = await PinService(db).reorder(board, data.ordered_ids, access)
    return ApiResponse(data=ReorderResponse(updated=updated, ordered_ids=data.ordered_ids))
