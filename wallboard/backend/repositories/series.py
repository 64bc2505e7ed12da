"""
Series Repository.

Data access for series and their ordered items.
"""

from sqlalchemy import delete, func, select, update

from wallboard.backend.models.series import Series, SeriesItem
from wallboard.backend.repositories.base import BaseRepository


class SeriesRepository(BaseRepository[Series]):
    model = Series

    async def list_series(self, limit: int = 50, offset: int = 0) -> list[Series]:
        result = await self.session.execute(
            select(Series).order_by(Series.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def list_items(self, series_id: str) -> list[SeriesItem]:
        result = await self.session.execute(
            select(SeriesItem)
            .where(SeriesItem.series_id == series_id)
            .order_by(SeriesItem.position.asc(), SeriesItem.created_at.asc())
        )
        return list(result.scalars().all())

    async def find_item(self, series_id: str, entry_kind: str, entry_id: str) -> SeriesItem | None:
        result = await self.session.execute(
            select(SeriesItem).where(
                SeriesItem.series_id == series_id,
                SeriesItem.entry_kind == entry_kind,
                SeriesItem.entry_id == entry_id,
            )
        )
        return result.scalar_one_or_none()

    async def max_position(self, series_id: str) -> int | None:
        result = await self.session.execute(
            select(func.max(SeriesItem.position)).where(SeriesItem.series_id == series_id)
        )
        return result.scalar_one_or_none()

    async def add_item(self, series_id: str, entry_kind: str, entry_id: str, position: int) -> SeriesItem:
        item = SeriesItem(
            series_id=series_id,
            entry_kind=entry_kind,
            entry_id=entry_id,
            position=position,
        )
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def remove_item(self, series_id: str, item_id: str) -> int:
        result = await self.session.execute(
            delete(SeriesItem).where(SeriesItem.series_id == series_id, SeriesItem.id == item_id)
        )
        return result.rowcount or 0

    async def set_position(self, series_id: str, item_id: str, position: int) -> None:
        await self.session.execute(
            update(SeriesItem)
            .where(SeriesItem.series_id == series_id, SeriesItem.id == item_id)
            .values(position=position)
            .execution_options(synchronize_session="fetch")
        )

    async def delete_items(self, series_id: str) -> None:
        await self.session.execute(delete(SeriesItem).where(SeriesItem.series_id == series_id))
