"""
Auth API Endpoints.

There are no accounts; the front end only needs to know whether the
password it holds is the wall password.
"""

from fastapi import APIRouter

from wallboard.backend.core.exceptions import AuthenticationError
from wallboard.backend.core.security import check_wall_password
from wallboard.backend.schemas.auth import PasswordVerify, VerifyResponse
from wallboard.backend.schemas.base import ApiResponse

router = APIRouter()


@router.post(
    "/verify",
    response_model=ApiResponse[VerifyResponse],
    summary="Verify the wall password",
)
async def verify_password(data: PasswordVerify) -> ApiResponse[VerifyResponse]:
    if not check_wall_password(data.password):
        raise AuthenticationError()
    return ApiResponse(data=VerifyResponse(ok=True))
