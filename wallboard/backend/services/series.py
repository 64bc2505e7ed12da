"""
Series Service.

A series strings entries from any board into a named, ordered sequence.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.exceptions import ConflictError, NotFoundError, ValidationError
from wallboard.backend.core.security import WallAccess
from wallboard.backend.models.series import Series, SeriesItem
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.repositories.series import SeriesRepository
from wallboard.backend.schemas.series import SeriesCreate, SeriesItemCreate
from wallboard.backend.services.base import BaseService
from wallboard.backend.services.boards import get_board


class SeriesService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SeriesRepository(session)

    async def list_series(self, limit: int = 50, offset: int = 0) -> list[Series]:
        return await self.repo.list_series(limit=limit, offset=offset)

    async def create_series(self, data: SeriesCreate, access: WallAccess) -> Series:
        access.require()
        self._validate_required({"name": data.name}, ["name"])
        self._log_operation("Creating series", name=data.name)
        return await self._execute_db_operation(
            "create_series",
            self.repo.create(name=data.name.strip(), description=data.description),
        )

    async def get_series(
        self,
        series_id: str,
        access: WallAccess,
    ) -> tuple[Series, list[tuple[SeriesItem, Any]]]:
        """
        A series with its items in position order, each paired with its
        entry. Items whose entry is gone, or is a draft the caller may not
        see, are skipped.
        """
        series = await self.repo.get_by_id(series_id)
        resolved: list[tuple[SeriesItem, Any]] = []
        for item in await self.repo.list_items(series_id):
            board = get_board(item.entry_kind)
            entry = await EntryRepository(self.session, board.model).get_by_id_or_none(item.entry_id)
            if entry is None:
                continue
            if not access.authorized and not board.is_shareable(entry):
                continue
            resolved.append((item, entry))
        return series, resolved

    async def add_item(self, series_id: str, data: SeriesItemCreate, access: WallAccess) -> SeriesItem:
        """
        Append an entry to the end of the series.

        Raises:
            NotFoundError: unknown series, board or entry
            ConflictError: entry already in the series
        """
        access.require()
        await self.repo.get_by_id(series_id)
        board = get_board(data.entry_kind)
        if not await EntryRepository(self.session, board.model).exists(data.entry_id):
            raise NotFoundError(
                "Entry not found",
                details={"entry_kind": data.entry_kind, "entry_id": data.entry_id},
            )
        if await self.repo.find_item(series_id, board.key, data.entry_id) is not None:
            raise ConflictError("Entry is already in this series")

        current = await self.repo.max_position(series_id)
        position = 0 if current is None else current + 1
        self._log_operation("Adding series item", series_id=series_id, position=position)
        return await self._execute_db_operation(
            "add_series_item",
            self.repo.add_item(series_id, board.key, data.entry_id, position),
        )

    async def remove_item(self, series_id: str, item_id: str, access: WallAccess) -> None:
        access.require()
        removed = await self._execute_db_operation(
            "remove_series_item",
            self.repo.remove_item(series_id, item_id),
        )
        if not removed:
            raise NotFoundError("Series item not found", details={"item_id": item_id})

    async def reorder_items(self, series_id: str, ordered_item_ids: list[str], access: WallAccess) -> int:
        """Set position = list index for each listed item."""
        access.require()
        await self.repo.get_by_id(series_id)
        if len(set(ordered_item_ids)) != len(ordered_item_ids):
            raise ValidationError("ordered_item_ids contains duplicates")

        known = {item.id for item in await self.repo.list_items(series_id)}
        missing = [item_id for item_id in ordered_item_ids if item_id not in known]
        if missing:
            raise NotFoundError("Unknown series items", details={"missing": missing})

        for index, item_id in enumerate(ordered_item_ids):
            await self._execute_db_operation(
                "reorder_series_item",
                self.repo.set_position(series_id, item_id, index),
            )
        self._log_operation("Series reordered", series_id=series_id, count=len(ordered_item_ids))
        return len(ordered_item_ids)

    async def delete_series(self, series_id: str, access: WallAccess) -> None:
        access.require()
        await self.repo.get_by_id(series_id)
        await self._execute_db_operation("delete_series_items", self.repo.delete_items(series_id))
        await self._execute_db_operation("delete_series", self.repo.delete(series_id))
        self._log_operation("Series deleted", series_id=series_id)
