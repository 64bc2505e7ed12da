"""
Wall Model.

A named, optionally private grouping of wall entries. Deleting a wall
deletes its entries; the default wall is never deleted.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from wallboard.backend.models.base import Base, TimestampMixin, UUIDMixin


class Wall(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "walls"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    is_public: Mapped[bool] = mapped_column(default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Wall(id={self.id}, slug={self.slug!r})>"
