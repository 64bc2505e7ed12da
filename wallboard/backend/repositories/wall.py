"""
Wall Repository.
"""

from sqlalchemy import select

from wallboard.backend.models.wall import Wall
from wallboard.backend.repositories.base import BaseRepository


class WallRepository(BaseRepository[Wall]):
    model = Wall

    async def get_by_slug(self, slug: str) -> Wall | None:
        result = await self.session.execute(select(Wall).where(Wall.slug == slug))
        return result.scalar_one_or_none()

    async def slugs_like(self, base: str) -> set[str]:
        """Existing slugs equal to base or of the form base-N."""
        result = await self.session.execute(
            select(Wall.slug).where((Wall.slug == base) | Wall.slug.like(f"{base}-%"))
        )
        return set(result.scalars().all())

    async def list_walls(self, include_private: bool = False) -> list[Wall]:
        query = select(Wall).order_by(Wall.created_at.asc())
        if not include_private:
            query = query.where(Wall.is_public.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())
