"""
Series Models.

A series is an ordered, named group of entries that may come from any
board. Items reference entries by (entry_kind, entry_id) rather than by
foreign key, so one series can mix boards.
"""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wallboard.backend.models.base import Base, TimestampMixin, UUIDMixin


class Series(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "series"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Series(id={self.id}, name={self.name!r})>"


class SeriesItem(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "series_items"
    __table_args__ = (
        UniqueConstraint("series_id", "entry_kind", "entry_id", name="uq_series_items_entry"),
    )

    series_id: Mapped[str] = mapped_column(
        ForeignKey("series.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entry_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    entry_id: Mapped[str] = mapped_column(String(36), nullable=False)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
