"""
Pin Ranking.

Pinned entries float to the top of a board in an explicit, owner-chosen
order. Each pin scope (one board; one wall for the wall board) keeps its
own sequence of pin_order values.

Rules:
    - pin appends to the end of the scope's sequence (max + 1, or 0 when
      nothing is pinned); pinning a pinned entry changes nothing
    - unpin clears the pair and leaves gaps behind; orders are never
      compacted, only relative order matters
    - reorder assigns pin_order = position in the requested list and pins
      every listed entry; entries not listed keep their values

pin computes max + 1 and writes it in a single conditional UPDATE, so
the already-pinned check and the new order cannot drift apart between
sessions. Reorder writes and commits while holding the per-board lock.
Ties that still slip through fall back to created_at.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.concurrency import get_lock
from wallboard.backend.core.exceptions import DatabaseError, NotFoundError, ValidationError
from wallboard.backend.core.security import WallAccess
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.services.base import BaseService
from wallboard.backend.services.boards import Board, get_board


def _lock_key(board: Board) -> str:
    return f"pins:{board.key}"


class PinService(BaseService):
    """Pin, unpin and reorder entries. Every operation needs the password."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def pin(self, board_key: str, entry_id: str, access: WallAccess) -> Any:
        access.require()
        board = get_board(board_key)
        repo = EntryRepository(self.session, board.model)
        entry = await repo.get_by_id(entry_id)

        wall_id = getattr(entry, "wall_id", None)
        async with get_lock(_lock_key(board)):
            changed = await self._execute_db_operation(
                "pin_entry",
                repo.pin_next(entry.id, wall_id),
            )
            await self.session.commit()

        await self.session.refresh(entry)
        if changed:
            self._log_operation("Entry pinned", board=board.key, entry_id=entry_id, pin_order=entry.pin_order)
        else:
            self._log_debug("Entry already pinned", board=board.key, entry_id=entry_id)
        return entry

    async def unpin(self, board_key: str, entry_id: str, access: WallAccess) -> Any:
        access.require()
        board = get_board(board_key)
        repo = EntryRepository(self.session, board.model)
        entry = await repo.get_by_id(entry_id)

        await self._execute_db_operation(
            "unpin_entry",
            repo.set_pin_state(entry.id, False, None),
        )
        self._log_operation("Entry unpinned", board=board.key, entry_id=entry_id)
        await self.session.refresh(entry)
        return entry

    async def set_pinned(self, board_key: str, entry_id: str, pin: bool, access: WallAccess) -> Any:
        if pin:
            return await self.pin(board_key, entry_id, access)
        return await self.unpin(board_key, entry_id, access)

    async def reorder(self, board_key: str, ordered_ids: list[str], access: WallAccess) -> int:
        """
        Assign pin_order by list position and pin every listed entry.

        Unknown ids are rejected before anything is written. A store
        failure part way through raises DatabaseError whose details carry
        the number of writes already issued; the request transaction is
        then rolled back as a whole.

        Returns:
            Number of entries written
        """
        access.require()
        board = get_board(board_key)
        repo = EntryRepository(self.session, board.model)

        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError(
                "ordered_ids contains duplicates",
                details={"ordered_ids": ordered_ids},
            )

        existing = await repo.existing_ids(ordered_ids)
        missing = [entry_id for entry_id in ordered_ids if entry_id not in existing]
        if missing:
            raise NotFoundError("Unknown entry ids", details={"missing": missing})

        applied = 0
        async with get_lock(_lock_key(board)):
            for index, entry_id in enumerate(ordered_ids):
                try:
                    await repo.set_pin_state(entry_id, True, index)
                except SQLAlchemyError as e:
                    self._logger.error(
                        "Reorder failed part way",
                        extra={"board": board.key, "applied": applied, "error": str(e)},
                    )
                    raise DatabaseError(
                        "Reorder failed",
                        details={"applied": applied, "total": len(ordered_ids)},
                    ) from e
                applied += 1
            await self.session.commit()

        self._log_operation("Pins reordered", board=board.key, count=applied)
        return applied
