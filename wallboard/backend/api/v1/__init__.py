"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from wallboard.backend.api.v1.endpoints import auth, entries, links, pins, series, walls

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(entries.router, prefix="/boards/{board}/entries", tags=["entries"])
router.include_router(entries.drafts_router, prefix="/drafts", tags=["entries"])
router.include_router(pins.router, prefix="/boards/{board}/pins", tags=["pins"])
router.include_router(links.router, prefix="/links", tags=["links"])
router.include_router(walls.router, prefix="/walls", tags=["walls"])
router.include_router(series.router, prefix="/series", tags=["series"])
