"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.database import get_db_session
from wallboard.backend.core.logging import get_logger
from wallboard.backend.core.security import WallAccess
from wallboard.backend.services.moderation import ContentModerator, get_moderator
from wallboard.backend.services.shortener import ExternalShortener, get_shortener

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_wall_access(
    x_wall_password: str | None = Header(None, description="Wall password"),
) -> WallAccess:
    """
    Check the X-Wall-Password header once per request.

    A wrong password is treated like no password; the services decide
    whether the operation needs it.
    """
    access = WallAccess.from_password(x_wall_password)
    if x_wall_password and not access.authorized:
        logger.info("Wall password rejected")
    return access


Access = Annotated[WallAccess, Depends(get_wall_access)]

Moderator = Annotated[ContentModerator, Depends(get_moderator)]

Shortener = Annotated[ExternalShortener, Depends(get_shortener)]
