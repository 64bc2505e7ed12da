"""
Series Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wallboard.backend.schemas.entry import EntryResponse


class SeriesCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)


class SeriesItemCreate(BaseModel):
    entry_kind: str = Field(..., min_length=1, description="Board key of the entry")
    entry_id: str = Field(..., min_length=1)


class SeriesReorder(BaseModel):
    ordered_item_ids: list[str]


class SeriesResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SeriesItemResponse(BaseModel):
    id: str
    entry_kind: str
    entry_id: str
    position: int
    entry: EntryResponse | None = None


class SeriesDetailResponse(SeriesResponse):
    items: list[SeriesItemResponse] = Field(default_factory=list)
