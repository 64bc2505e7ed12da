"""
Short-Link Directory.

Maps short opaque codes to entries. A target has at most one code; asking
again returns the same one. Codes are drawn from an alphabet without
look-alike characters (no 0/O, 1/I/l) using the secrets module, and grow
by one character on each collision until the attempt budget runs out.
"""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import quote

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.config import get_app_config
from wallboard.backend.core.exceptions import (
    AuthorizationError,
    CodeAllocationError,
    NotFoundError,
)
from wallboard.backend.core.security import WallAccess
from wallboard.backend.models.short_link import ShortLink
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.repositories.short_link import ShortLinkRepository
from wallboard.backend.services.base import BaseService
from wallboard.backend.services.boards import get_board

CodeGenerator = Callable[[int], str]


@dataclass(frozen=True)
class LinkTarget:
    kind: str
    id: str


def random_code(length: int, alphabet: str | None = None) -> str:
    """Draw `length` characters uniformly from the configured alphabet."""
    if alphabet is None:
        alphabet = get_app_config().sharing.code_alphabet
    return "".join(secrets.choice(alphabet) for _ in range(length))


def short_path(code: str) -> str:
    return f"/s/{quote(code, safe='')}"


def request_origin(host: str | None, forwarded_proto: str | None) -> str | None:
    """
    Origin for absolute share URLs.

    The configured public_base_url wins; otherwise the origin is rebuilt
    from X-Forwarded-Proto and Host. Without either, links stay path-only.
    """
    configured = get_app_config().sharing.public_base_url.strip()
    if configured:
        return configured.rstrip("/")
    if forwarded_proto and host:
        return f"{forwarded_proto}://{host}"
    return None


def build_short_url(code: str, origin: str | None) -> str:
    path = short_path(code)
    return f"{origin}{path}" if origin else path


class ShortLinkService(BaseService):
    """Create and resolve short links."""

    def __init__(self, session: AsyncSession, generate: CodeGenerator | None = None) -> None:
        super().__init__(session)
        self.repo = ShortLinkRepository(session)
        sharing = get_app_config().sharing
        self.code_length = sharing.code_length
        self.max_attempts = sharing.max_attempts
        self._generate = generate or (lambda length: random_code(length, sharing.code_alphabet))

    async def _check_target(self, target_kind: str, target_id: str, access: WallAccess) -> None:
        """
        Raises:
            NotFoundError: unknown board or entry
            AuthorizationError: draft target without the password
        """
        board = get_board(target_kind)
        entry = await EntryRepository(self.session, board.model).get_by_id_or_none(target_id)
        if entry is None:
            raise NotFoundError(
                "Entry not found",
                details={"target_kind": target_kind, "target_id": target_id},
            )
        if not access.authorized and not board.is_shareable(entry):
            raise AuthorizationError("This note is not publicly shareable.")

    async def _try_insert(self, code: str, target_kind: str, target_id: str) -> ShortLink | None:
        """
        Insert one link, or return None when a unique constraint rejects it.

        The transaction holds only reads at this point, so it is rolled back
        to leave the session usable for the next lookup.
        """
        try:
            return await self.repo.insert(code, target_kind, target_id)
        except IntegrityError:
            await self.session.rollback()
            return None

    async def create_or_get_link(self, target_kind: str, target_id: str, access: WallAccess) -> ShortLink:
        """
        Return the target's code, allocating one if it has none.

        Attempt k (from 0) draws a code of code_length + k characters. A
        candidate already in use counts as a collision. When a concurrent
        request stores a link for the same target first, that link is
        returned.

        Raises:
            CodeAllocationError: every attempt collided; nothing is stored
        """
        await self._check_target(target_kind, target_id, access)

        existing = await self.repo.get_by_target(target_kind, target_id)
        if existing is not None:
            self._log_debug("Short link reused", code=existing.code, target_id=target_id)
            return existing

        for attempt in range(self.max_attempts):
            code = self._generate(self.code_length + attempt)
            if await self.repo.code_exists(code):
                self._log_debug("Short code collision", attempt=attempt, length=len(code))
                continue
            link = await self._execute_db_operation(
                "create_short_link",
                self._try_insert(code, target_kind, target_id),
            )
            if link is None:
                winner = await self.repo.get_by_target(target_kind, target_id)
                if winner is not None:
                    self._log_debug("Short link created concurrently", code=winner.code, target_id=target_id)
                    return winner
                self._log_debug("Short code collision on insert", attempt=attempt, length=len(code))
                continue
            self._log_operation("Short link created", code=code, target_kind=target_kind)
            return link

        self._logger.error(
            "Short code allocation exhausted",
            extra={"attempts": self.max_attempts, "target_kind": target_kind},
        )
        raise CodeAllocationError(details={"attempts": self.max_attempts})

    async def resolve(self, code: str) -> LinkTarget:
        """
        Raises:
            NotFoundError: unknown code
        """
        link = await self.repo.get_by_code(code)
        if link is None:
            raise NotFoundError("Short link not found", details={"code": code})
        return LinkTarget(kind=link.target_kind, id=link.target_id)
