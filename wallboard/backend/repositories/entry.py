"""
Entry Repository.

Data access for board entries. One class serves every board table; the
concrete model is chosen by the caller from the board registry.

All listing queries apply the wall ordering:
pinned first, then pin_order ascending (unset last), then newest first.
"""

from typing import Any

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.models.entry import EntryMixin, Visibility, WallEntry
from wallboard.backend.repositories.base import BaseRepository


class EntryRepository(BaseRepository[Any]):
    """Repository for any board's entry table."""

    def __init__(self, session: AsyncSession, model: type[EntryMixin]) -> None:
        super().__init__(session, model)

    def _scope_filter(self, wall_id: str | None) -> list[ColumnElement[bool]]:
        """Filter clauses selecting one pin scope of this table."""
        if self.model is not WallEntry:
            return []
        if wall_id is None:
            return [WallEntry.wall_id.is_(None)]
        return [WallEntry.wall_id == wall_id]

    def _ordering(self) -> tuple:
        return (
            self.model.is_pinned.desc(),
            self.model.pin_order.asc().nulls_last(),
            self.model.created_at.desc(),
        )

    async def list_sorted(
        self,
        wall_id: str | None = None,
        include_drafts: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Any]:
        """List one scope's entries in wall order."""
        query = select(self.model).where(*self._scope_filter(wall_id))
        if not include_drafts:
            query = query.where(self.model.visibility == Visibility.PUBLIC.value)
        result = await self.session.execute(
            query.order_by(*self._ordering()).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def count_visible(self, wall_id: str | None = None, include_drafts: bool = False) -> int:
        query = select(func.count()).select_from(self.model).where(*self._scope_filter(wall_id))
        if not include_drafts:
            query = query.where(self.model.visibility == Visibility.PUBLIC.value)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_drafts(self, limit: int = 50, offset: int = 0) -> list[Any]:
        """Draft entries across all walls, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.visibility == Visibility.DRAFT.value)
            .order_by(self.model.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def existing_ids(self, ids: list[str]) -> set[str]:
        if not ids:
            return set()
        result = await self.session.execute(
            select(self.model.id).where(self.model.id.in_(ids))
        )
        return set(result.scalars().all())

    async def pin_next(self, entry_id: str, wall_id: str | None = None) -> int:
        """Pin an unpinned entry at max(pin_order) + 1 in one statement.

        Returns the number of rows changed; 0 means the entry was already
        pinned (or does not exist).
        """
        next_order = (
            select(func.coalesce(func.max(self.model.pin_order), -1) + 1)
            .where(self.model.is_pinned.is_(True))
            .where(*self._scope_filter(wall_id))
            .correlate(None)
            .scalar_subquery()
        )
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == entry_id)
            .where(self.model.is_pinned.is_(False))
            .values(is_pinned=True, pin_order=next_order)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def set_pin_state(self, entry_id: str, is_pinned: bool, pin_order: int | None) -> None:
        """Write the pin pair for one entry in a single statement."""
        await self.session.execute(
            update(self.model)
            .where(self.model.id == entry_id)
            .values(is_pinned=is_pinned, pin_order=pin_order)
            .execution_options(synchronize_session="fetch")
        )

    async def delete_for_wall(self, wall_id: str) -> int:
        """Delete every entry of a wall. Only meaningful for the wall board."""
        result = await self.session.execute(
            delete(WallEntry).where(WallEntry.wall_id == wall_id)
        )
        return result.rowcount or 0
