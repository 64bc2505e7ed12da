"""
Walls API Endpoints.
"""

from fastapi import APIRouter

from wallboard.backend.core.dependencies import Access, DbSession
from wallboard.backend.models.wall import Wall
from wallboard.backend.schemas.base import ApiResponse
from wallboard.backend.schemas.wall import WallCreate, WallResponse, WallUpdate
from wallboard.backend.services.walls import WallService

router = APIRouter()


def _to_response(service: WallService, wall: Wall) -> WallResponse:
    response = WallResponse.model_validate(wall)
    response.is_default = service.is_default(wall)
    return response


@router.get(
    "",
    response_model=ApiResponse[list[WallResponse]],
    summary="List walls",
    description="Public walls; private walls too when the wall password is supplied.",
)
async def list_walls(db: DbSession, access: Access) -> ApiResponse[list[WallResponse]]:
    service = WallService(db)
    walls = await service.list_walls(access)
    return ApiResponse(data=[_to_response(service, w) for w in walls])


@router.post(
    "",
    response_model=ApiResponse[WallResponse],
    status_code=201,
    summary="Create a wall",
    description="The slug is derived from the name and made unique with a numeric suffix.",
)
async def create_wall(data: WallCreate, db: DbSession, access: Access) -> ApiResponse[WallResponse]:
    service = WallService(db)
    wall = await service.create_wall(data, access)
    return ApiResponse(data=_to_response(service, wall))


@router.get("/{slug}", response_model=ApiResponse[WallResponse], summary="Get a wall")
async def get_wall(slug: str, db: DbSession, access: Access) -> ApiResponse[WallResponse]:
    service = WallService(db)
    wall = await service.get_wall(slug, access)
    return ApiResponse(data=_to_response(service, wall))


@router.patch(
    "/{slug}",
    response_model=ApiResponse[WallResponse],
    summary="Update a wall",
    description="Rename or change visibility. The slug does not change.",
)
async def update_wall(
    slug: str,
    data: WallUpdate,
    db: DbSession,
    access: Access,
) -> ApiResponse[WallResponse]:
    service = WallService(db)
    wall = await service.update_wall(slug, data, access)
    return ApiResponse(data=_to_response(service, wall))


@router.delete(
    "/{slug}",
    status_code=204,
    summary="Delete a wall",
    description="Deletes the wall and all of its entries. The default wall cannot be deleted.",
)
async def delete_wall(slug: str, db: DbSession, access: Access) -> None:
    await WallService(db).delete_wall(slug, access)
