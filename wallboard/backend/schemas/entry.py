"""
Entry Schemas.

Request and response shapes shared by every board. Board-specific fields
(name for friends, artist for songs, wall for the wall board) are optional
here and checked against the board in the service layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wallboard.backend.models.entry import Visibility


class EntryCreate(BaseModel):
    """Schema for posting a new entry to a board."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Entry body",
        examples=["Remember to water the plants."],
    )
    title: str | None = Field(
        default=None,
        max_length=255,
        description='Optional title; blank or "(optional)" is stored as no title',
    )
    visibility: Visibility = Field(
        default=Visibility.PUBLIC,
        description="Draft entries are only allowed on boards that support drafts",
    )
    name: str | None = Field(
        default=None,
        max_length=100,
        description="Author name (friends board only, required there)",
    )
    artist: str | None = Field(default=None, max_length=255, description="Songs board only")
    wall: str | None = Field(
        default=None,
        max_length=120,
        description="Wall slug (wall board only); omitted means the default wall",
    )


class EntryUpdate(BaseModel):
    """Schema for editing an entry. Only provided fields change."""

    text: str | None = Field(default=None, min_length=1, max_length=10000)
    title: str | None = Field(default=None, max_length=255)
    visibility: Visibility | None = None
    artist: str | None = Field(default=None, max_length=255)


class EntryResponse(BaseModel):
    """Schema for an entry in API responses."""

    id: str = Field(description="Entry unique identifier")
    board: str = Field(description="Board key the entry belongs to")
    text: str
    title: str | None = None
    visibility: str
    is_pinned: bool
    pin_order: int | None = None
    name: str | None = None
    artist: str | None = None
    wall_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entry(cls, board: str, entry: Any) -> "EntryResponse":
        return cls(
            id=entry.id,
            board=board,
            text=entry.text,
            title=entry.title,
            visibility=entry.visibility,
            is_pinned=entry.is_pinned,
            pin_order=entry.pin_order,
            name=getattr(entry, "name", None),
            artist=getattr(entry, "artist", None),
            wall_id=getattr(entry, "wall_id", None),
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
