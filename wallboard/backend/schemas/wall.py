"""
Wall Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WallCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Travel"])
    is_public: bool = True


class WallUpdate(BaseModel):
    """Renaming a wall keeps its slug."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    is_public: bool | None = None


class WallResponse(BaseModel):
    id: str
    name: str
    slug: str
    is_public: bool
    is_default: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
