"""
Board Registry.

Every kind of entry lives on a board. The registry is the single place
that knows which table backs a board, how the front end addresses one of
its entries, and which rules apply to posting.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from wallboard.backend.core.exceptions import NotFoundError
from wallboard.backend.models.entry import (
    EntryMixin,
    FriendEntry,
    ProjectIdea,
    SongQuote,
    TechNote,
    WallEntry,
)


@dataclass(frozen=True)
class Board:
    key: str
    model: type[EntryMixin]
    label: str
    supports_drafts: bool = False
    requires_password_to_post: bool = True
    moderated: bool = False

    def view_fragment(self, entry_id: str) -> str:
        """URL fragment that opens this entry in the front end, without '#'."""
        encoded = quote(entry_id, safe="")
        if self.key == "wall":
            return f"entry={encoded}"
        return f"{self.key}&entry={encoded}"

    def preview_title(self, entry: Any) -> str:
        """Human title for link previews."""
        if self.key == "friends":
            name = (getattr(entry, "name", None) or "").strip()
            return f"{name}’s Note" if name else "Friend Note"
        if self.key == "wall":
            return "Note on My Wall"
        return self.label

    def is_shareable(self, entry: Any) -> bool:
        """Whether the entry may be exposed without the wall password."""
        return not (self.supports_drafts and entry.is_draft)


BOARDS: dict[str, Board] = {
    board.key: board
    for board in (
        Board("wall", WallEntry, "My Wall", supports_drafts=True),
        Board(
            "friends",
            FriendEntry,
            "Friend Note",
            requires_password_to_post=False,
            moderated=True,
        ),
        Board("tech", TechNote, "Tech Note"),
        Board("songs", SongQuote, "Song Quote"),
        Board("ideas", ProjectIdea, "Project Idea"),
    )
}


def get_board(key: str) -> Board:
    """Look up a board by key. Unknown keys raise NotFoundError."""
    board = BOARDS.get(key)
    if board is None:
        raise NotFoundError(f"Unknown board: {key}", details={"board": key})
    return board
