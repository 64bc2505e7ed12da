"""
Short Link Schemas.
"""

from pydantic import BaseModel, Field


class LinkCreate(BaseModel):
    """Request a short link for one entry."""

    target_kind: str = Field(..., min_length=1, description="Board key of the target entry")
    target_id: str = Field(..., min_length=1, description="Target entry ID")


class LinkResponse(BaseModel):
    code: str
    short_url: str = Field(description="URL to share; external shortener result when one is configured")
    external: bool = Field(default=False, description="Whether short_url came from an external shortener")


class LinkTargetResponse(BaseModel):
    target_kind: str
    target_id: str
