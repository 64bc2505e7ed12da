"""
Entry Models.

Every board stores its notes in its own table, but all of them share the
same shape: text, optional title, visibility, and pin state. EntryMixin
carries that shape; the concrete classes add what is specific to a board.
"""

from enum import StrEnum

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from wallboard.backend.models.base import Base, TimestampMixin, UUIDMixin


class Visibility(StrEnum):
    PUBLIC = "public"
    DRAFT = "draft"


class EntryMixin(UUIDMixin, TimestampMixin):
    """
    Columns shared by every board's entries.

    Pin state invariant, enforced by a check constraint:
    is_pinned is true exactly when pin_order is set.
    """

    text: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    visibility: Mapped[str] = mapped_column(
        String(16),
        default=Visibility.PUBLIC.value,
        nullable=False,
    )
    is_pinned: Mapped[bool] = mapped_column(default=False, nullable=False)
    pin_order: Mapped[int | None] = mapped_column(nullable=True)

    @declared_attr.directive
    def __table_args__(cls) -> tuple:
        return (
            CheckConstraint(
                "(is_pinned AND pin_order IS NOT NULL) OR "
                "(NOT is_pinned AND pin_order IS NULL)",
                name="pin_state",
            ),
            CheckConstraint("pin_order IS NULL OR pin_order >= 0", name="pin_order_non_negative"),
            CheckConstraint("visibility IN ('public', 'draft')", name="visibility"),
            Index(f"ix_{cls.__tablename__}_pinned", "is_pinned", "pin_order"),
        )

    @property
    def is_draft(self) -> bool:
        return self.visibility == Visibility.DRAFT.value

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}(id={self.id}, pinned={self.is_pinned}, "
            f"pin_order={self.pin_order})>"
        )


class WallEntry(EntryMixin, Base):
    """A note on the owner's wall. wall_id NULL means the default wall."""

    __tablename__ = "wall_entries"

    wall_id: Mapped[str | None] = mapped_column(
        ForeignKey("walls.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )


class FriendEntry(EntryMixin, Base):
    """A note left by a visitor. Always public."""

    __tablename__ = "friend_entries"

    name: Mapped[str] = mapped_column(String(100), nullable=False)


class TechNote(EntryMixin, Base):
    __tablename__ = "tech_notes"


class SongQuote(EntryMixin, Base):
    __tablename__ = "song_quotes"

    artist: Mapped[str | None] = mapped_column(String(255), nullable=True)


class ProjectIdea(EntryMixin, Base):
    __tablename__ = "project_ideas"
