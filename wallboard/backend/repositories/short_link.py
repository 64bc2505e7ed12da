"""
Short Link Repository.
"""

from sqlalchemy import select

from wallboard.backend.models.short_link import ShortLink
from wallboard.backend.repositories.base import BaseRepository


class ShortLinkRepository(BaseRepository[ShortLink]):
    model = ShortLink

    async def get_by_code(self, code: str) -> ShortLink | None:
        result = await self.session.execute(select(ShortLink).where(ShortLink.code == code))
        return result.scalar_one_or_none()

    async def get_by_target(self, target_kind: str, target_id: str) -> ShortLink | None:
        result = await self.session.execute(
            select(ShortLink).where(
                ShortLink.target_kind == target_kind,
                ShortLink.target_id == target_id,
            )
        )
        return result.scalar_one_or_none()

    async def code_exists(self, code: str) -> bool:
        result = await self.session.execute(select(ShortLink.code).where(ShortLink.code == code))
        return result.scalar_one_or_none() is not None

    async def insert(self, code: str, target_kind: str, target_id: str) -> ShortLink:
        link = ShortLink(code=code, target_kind=target_kind, target_id=target_id)
        self.session.add(link)
        await self.session.flush()
        return link
