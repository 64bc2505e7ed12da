"""
Wall Service.

Named walls partition the wall board. The default wall is protected: it
always exists, cannot be deleted, and owns every wall entry whose wall_id
is NULL.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.config import get_app_config
from wallboard.backend.core.exceptions import ConflictError, NotFoundError
from wallboard.backend.core.security import WallAccess
from wallboard.backend.core.utils import slugify
from wallboard.backend.models.entry import WallEntry
from wallboard.backend.models.wall import Wall
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.repositories.wall import WallRepository
from wallboard.backend.schemas.wall import WallCreate, WallUpdate
from wallboard.backend.services.base import BaseService

FALLBACK_SLUG = "wall"


class WallService(BaseService):
    """Create, rename, list and delete walls."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = WallRepository(session)
        self.entries = EntryRepository(session, WallEntry)
        walls_config = get_app_config().application.walls
        self.default_slug = walls_config.default_slug
        self.default_name = walls_config.default_name

    def is_default(self, wall: Wall) -> bool:
        return wall.slug == self.default_slug

    async def ensure_default_wall(self) -> Wall:
        """Return the default wall, creating its row on first use."""
        wall = await self.repo.get_by_slug(self.default_slug)
        if wall is None:
            self._log_operation("Creating default wall", slug=self.default_slug)
            wall = await self._execute_db_operation(
                "create_default_wall",
                self.repo.create(name=self.default_name, slug=self.default_slug, is_public=True),
            )
        return wall

    async def unique_slug(self, name: str) -> str:
        """
        Derive a URL-safe slug from a name, suffixing -2, -3, ... when the
        plain slug is taken. The default wall's slug is always reserved.
        """
        base = slugify(name) or FALLBACK_SLUG
        taken = await self.repo.slugs_like(base)
        taken.add(self.default_slug)
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    async def list_walls(self, access: WallAccess) -> list[Wall]:
        await self.ensure_default_wall()
        return await self.repo.list_walls(include_private=access.authorized)

    async def get_wall(self, slug: str, access: WallAccess) -> Wall:
        """
        Raises:
            NotFoundError: unknown slug
            AuthenticationError: private wall without the password
        """
        if slug == self.default_slug:
            wall = await self.ensure_default_wall()
        else:
            wall = await self.repo.get_by_slug(slug)
        if wall is None:
            raise NotFoundError("Wall not found", details={"slug": slug})
        if not wall.is_public:
            access.require()
        return wall

    async def resolve_wall_id(self, slug: str | None, access: WallAccess) -> str | None:
        """
        Map a wall slug to the wall_id stored on entries.

        The default wall (or no slug) maps to None.
        """
        if slug is None or slug == self.default_slug:
            return None
        wall = await self.get_wall(slug, access)
        return wall.id

    async def create_wall(self, data: WallCreate, access: WallAccess) -> Wall:
        access.require()
        slug = await self.unique_slug(data.name)
        self._log_operation("Creating wall", slug=slug)
        return await self._execute_db_operation(
            "create_wall",
            self.repo.create(name=data.name.strip(), slug=slug, is_public=data.is_public),
        )

    async def update_wall(self, slug: str, data: WallUpdate, access: WallAccess) -> Wall:
        """Rename or change visibility. The slug never changes."""
        access.require()
        wall = await self.get_wall(slug, access)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if not changes:
            return wall
        self._log_operation("Updating wall", slug=slug, fields=list(changes))
        return await self._execute_db_operation(
            "update_wall",
            self.repo.update(wall.id, **changes),
        )

    async def delete_wall(self, slug: str, access: WallAccess) -> int:
        """
        Delete a wall and all of its entries.

        Returns:
            Number of entries deleted with the wall

        Raises:
            ConflictError: the default wall
        """
        access.require()
        if slug == self.default_slug:
            raise ConflictError("The default wall cannot be deleted")
        wall = await self.get_wall(slug, access)
        removed = await self._execute_db_operation(
            "delete_wall_entries",
            self.entries.delete_for_wall(wall.id),
        )
        await self._execute_db_operation("delete_wall", self.repo.delete(wall.id))
        self._log_operation("Wall deleted", slug=slug, entries_deleted=removed)
        return removed
