"""
Short Link Model.

Maps an opaque code to exactly one entry. At most one link exists per
target, enforced by a unique constraint on (target_kind, target_id).
"""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wallboard.backend.core.utils import utc_now
from wallboard.backend.models.base import Base


class ShortLink(Base):
    __tablename__ = "short_links"
    __table_args__ = (
        UniqueConstraint("target_kind", "target_id", name="uq_short_links_target"),
    )

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"<ShortLink(code={self.code!r}, target={self.target_kind}:{self.target_id})>"
