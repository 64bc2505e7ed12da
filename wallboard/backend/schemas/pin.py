"""
Pin Schemas.
"""

from pydantic import BaseModel, Field


class PinRequest(BaseModel):
    """Pin or unpin one entry."""

    id: str = Field(..., min_length=1, description="Entry ID")
    pin: bool = Field(..., description="True to pin, false to unpin")


class ReorderRequest(BaseModel):
    """Desired order of pinned entries, first item first."""

    ordered_ids: list[str] = Field(..., description="Entry IDs in display order")


class PinStateResponse(BaseModel):
    id: str
    is_pinned: bool
    pin_order: int | None = None


class ReorderResponse(BaseModel):
    updated: int = Field(description="Number of entries written")
    ordered_ids: list[str]
