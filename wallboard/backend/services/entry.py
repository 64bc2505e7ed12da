"""
Entry Service.

Business logic for posting, editing, listing and deleting entries on any
board. Listing always returns the wall ordering (pinned first by
pin_order, then newest first); pin state itself is managed by
PinService.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.exceptions import AuthorizationError, ValidationError
from wallboard.backend.core.security import WallAccess
from wallboard.backend.core.utils import normalize_title
from wallboard.backend.models.entry import Visibility
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.schemas.entry import EntryCreate, EntryUpdate
from wallboard.backend.services.base import BaseService
from wallboard.backend.services.boards import Board, get_board
from wallboard.backend.services.moderation import ContentModerator
from wallboard.backend.services.walls import WallService

BLOCKED_MESSAGE = "Your message contains inappropriate content and cannot be posted."


class EntryService(BaseService):
    """
    Service for entry business logic.

    Every mutating operation takes a WallAccess; only posting to a board
    that allows anonymous posts (friends) works without the password.
    """

    def __init__(self, session: AsyncSession, moderator: ContentModerator | None = None) -> None:
        super().__init__(session)
        self.moderator = moderator
        self.walls = WallService(session)

    def _repo(self, board: Board) -> EntryRepository:
        return EntryRepository(self.session, board.model)

    async def list_sorted(
        self,
        board_key: str,
        access: WallAccess,
        wall_slug: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Any], int]:
        """
        Public entries of one board in wall order, with the total count.

        For the wall board, wall_slug selects the wall; private walls need
        the password.
        """
        board = get_board(board_key)
        wall_id = None
        if board.key == "wall":
            wall_id = await self.walls.resolve_wall_id(wall_slug, access)
        repo = self._repo(board)
        entries = await repo.list_sorted(wall_id=wall_id, limit=limit, offset=offset)
        total = await repo.count_visible(wall_id=wall_id)
        return entries, total

    async def list_drafts(self, access: WallAccess, limit: int = 50, offset: int = 0) -> list[Any]:
        """Wall drafts across every wall, newest first."""
        access.require()
        return await self._repo(get_board("wall")).list_drafts(limit=limit, offset=offset)

    async def get_entry(self, board_key: str, entry_id: str, access: WallAccess) -> Any:
        """
        Raises:
            NotFoundError: unknown board or entry
            AuthorizationError: draft requested without the password
        """
        board = get_board(board_key)
        entry = await self._repo(board).get_by_id(entry_id)
        if not access.authorized and not board.is_shareable(entry):
            raise AuthorizationError("This note is not publicly shareable.")
        return entry

    async def _screen(self, inputs: dict[str, str]) -> None:
        """Reject content the moderator blocks."""
        if self.moderator is None:
            return
        verdicts = await self.moderator.moderate(inputs)
        if any(v.blocked for v in verdicts):
            raise ValidationError(
                BLOCKED_MESSAGE,
                details={
                    "analysis": [v.as_dict() for v in verdicts],
                    "thresholds": self.moderator.thresholds,
                },
            )

    async def create_entry(self, board_key: str, data: EntryCreate, access: WallAccess) -> Any:
        """
        Post a new entry.

        Raises:
            AuthenticationError: board requires the password and it is missing
            ValidationError: blank fields, drafts on a board without drafts,
                or content rejected by moderation
        """
        board = get_board(board_key)
        if board.requires_password_to_post:
            access.require()

        fields: dict[str, Any] = {
            "text": data.text,
            "title": normalize_title(data.title),
            "visibility": data.visibility.value,
        }
        self._validate_required(fields, ["text"])

        if data.visibility == Visibility.DRAFT and not board.supports_drafts:
            raise ValidationError(
                f"Drafts are not supported on the {board.key} board",
                details={"board": board.key},
            )

        if board.key == "friends":
            fields["name"] = (data.name or "").strip()
            self._validate_required(fields, ["name"])
            if board.moderated:
                await self._screen({"name": fields["name"], "text": data.text})
        elif board.key == "songs":
            fields["artist"] = (data.artist or "").strip() or None
        elif board.key == "wall":
            fields["wall_id"] = await self.walls.resolve_wall_id(data.wall, access)

        self._log_operation("Creating entry", board=board.key, visibility=fields["visibility"])
        entry = await self._execute_db_operation(
            "create_entry",
            self._repo(board).create(**fields),
        )
        self._log_debug("Entry created", board=board.key, entry_id=entry.id)
        return entry

    async def update_entry(
        self,
        board_key: str,
        entry_id: str,
        data: EntryUpdate,
        access: WallAccess,
    ) -> Any:
        """Edit text, title, visibility (or artist). Pin state is untouched."""
        access.require()
        board = get_board(board_key)
        repo = self._repo(board)

        changes = data.model_dump(exclude_unset=True)
        if "title" in changes:
            changes["title"] = normalize_title(changes["title"])
        if changes.get("text") is not None:
            self._validate_required(changes, ["text"])
        else:
            changes.pop("text", None)
        if "visibility" in changes:
            visibility = changes.pop("visibility")
            if visibility is not None:
                if visibility == Visibility.DRAFT and not board.supports_drafts:
                    raise ValidationError(
                        f"Drafts are not supported on the {board.key} board",
                        details={"board": board.key},
                    )
                changes["visibility"] = Visibility(visibility).value
        if "artist" in changes and board.key != "songs":
            changes.pop("artist")

        if not changes:
            return await repo.get_by_id(entry_id)

        self._log_operation(
            "Updating entry",
            board=board.key,
            entry_id=entry_id,
            fields=list(changes),
        )
        return await self._execute_db_operation(
            "update_entry",
            repo.update(entry_id, **changes),
        )

    async def delete_entry(self, board_key: str, entry_id: str, access: WallAccess) -> None:
        """Hard delete. Existing short links to the entry stop resolving."""
        access.require()
        board = get_board(board_key)
        self._log_operation("Deleting entry", board=board.key, entry_id=entry_id)
        await self._execute_db_operation(
            "delete_entry",
            self._repo(board).delete(entry_id),
        )
