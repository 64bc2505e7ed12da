"""
Database models.

Importing this package registers every table on Base.metadata, which the
test fixtures and Alembic rely on.
"""

from wallboard.backend.models.base import Base
from wallboard.backend.models.entry import (
    FriendEntry,
    ProjectIdea,
    SongQuote,
    TechNote,
    Visibility,
    WallEntry,
)
from wallboard.backend.models.series import Series, SeriesItem
from wallboard.backend.models.short_link import ShortLink
from wallboard.backend.models.wall import Wall

__all__ = [
    "Base",
    "FriendEntry",
    "ProjectIdea",
    "Series",
    "SeriesItem",
    "ShortLink",
    "SongQuote",
    "TechNote",
    "Visibility",
    "Wall",
    "WallEntry",
]
