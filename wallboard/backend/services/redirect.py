"""
Redirect / Preview Responder.

Answers GET /s/{code}. People are redirected to the entry inside the
single-page front end; link-unfurling crawlers get a small HTML page
with Open Graph and Twitter card tags instead, since they do not run
the front end's JavaScript.

The responder walks one fixed sequence: look up the code, load the
entry, check it may be shown publicly, then pick the response by
audience. Each step can end the request.
"""

import json
from dataclasses import dataclass
from enum import StrEnum
from html import escape
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.config import get_app_config
from wallboard.backend.core.logging import get_logger
from wallboard.backend.core.utils import collapse_whitespace, truncate
from wallboard.backend.repositories.entry import EntryRepository
from wallboard.backend.repositories.short_link import ShortLinkRepository
from wallboard.backend.services.boards import BOARDS

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Not found"
FORBIDDEN_MESSAGE = "This note is not publicly shareable."


class Outcome(StrEnum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    REDIRECT = "redirect"
    PREVIEW = "preview"


@dataclass(frozen=True)
class ShareResponse:
    outcome: Outcome
    status_code: int
    body: str = ""
    location: str | None = None


def is_crawler(user_agent: str | None, signatures: list[str] | None = None) -> bool:
    """Case-insensitive substring match of the user agent against crawler signatures."""
    if signatures is None:
        signatures = get_app_config().sharing.crawler_signatures
    ua = (user_agent or "").lower()
    return any(signature.lower() in ua for signature in signatures)


def preview_description(text: str | None, limit: int) -> str:
    return truncate(collapse_whitespace(text or ""), limit)


def render_preview(title: str, description: str, view_url: str, view_hash: str) -> str:
    """Preview page for crawlers. All interpolated values are HTML-escaped."""
    t = escape(title, quote=True)
    d = escape(description, quote=True)
    url = escape(view_url, quote=True)
    frag = escape(view_hash, quote=True)
    script_target = json.dumps(view_hash).replace("</", "<\\/")
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{t}</title>
  <meta property="og:title" content="{t}" />
  <meta property="og:description" content="{d}" />
  <meta property="og:type" content="article" />
  <meta property="og:url" content="{url}" />
  <meta name="twitter:card" content="summary" />
  <meta name="twitter:title" content="{t}" />
  <meta name="twitter:description" content="{d}" />
  <link rel="canonical" href="{url}" />
  <meta http-equiv="refresh" content="0;url={frag}" />
  <style>
    body {{ margin: 0; background: #1a1a1a; color: #e0e0e0; font-family: ui-monospace, Menlo, Consolas, monospace; }}
    .wrap {{ padding: 24px; min-height: 100vh; display: grid; place-items: center; }}
    .card {{ width: min(680px, 92%); background: #2a2a2a; border: 1px solid #3a3a3a; border-radius: 8px; padding: 16px; }}
    h1 {{ margin: 0 0 8px 0; font-size: 18px; font-weight: 600; }}
    .desc {{ white-space: pre-wrap; opacity: 0.9; }}
    .actions {{ margin-top: 14px; display: flex; justify-content: flex-end; }}
    a.btn {{ display: inline-block; padding: 10px 14px; background: #333; color: #fff; border-radius: 6px; text-decoration: none; }}
  </style>
</head>
<body>
  <div class="wrap">
    <div class="card">
      <h1>{t}</h1>
      <div class="desc">{d}</div>
      <div class="actions"><a class="btn" href="/{frag}">Open</a></div>
    </div>
  </div>
  <script>location.replace({script_target});</script>
</body>
</html>"""


class ShareResponder:
    """Resolve a short code into a redirect, preview or error response."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.links = ShortLinkRepository(session)
        self.sharing = get_app_config().sharing

    async def _load_entry(self, kind: str, entry_id: str) -> Any:
        board = BOARDS.get(kind)
        if board is None:
            return None
        return await EntryRepository(self.session, board.model).get_by_id_or_none(entry_id)

    async def respond(
        self,
        code: str,
        user_agent: str | None,
        host: str | None,
        forwarded_proto: str | None = None,
    ) -> ShareResponse:
        link = await self.links.get_by_code(code)
        if link is None:
            logger.debug("Share code not found", extra={"code": code})
            return ShareResponse(Outcome.NOT_FOUND, 404, NOT_FOUND_MESSAGE)

        entry = await self._load_entry(link.target_kind, link.target_id)
        if entry is None:
            logger.info(
                "Share target missing",
                extra={"code": code, "target_kind": link.target_kind},
            )
            return ShareResponse(Outcome.NOT_FOUND, 404, NOT_FOUND_MESSAGE)

        board = BOARDS[link.target_kind]
        if not board.is_shareable(entry):
            return ShareResponse(Outcome.FORBIDDEN, 403, FORBIDDEN_MESSAGE)

        view_hash = f"#{board.view_fragment(entry.id)}"
        if host:
            view_url = f"{forwarded_proto or 'https'}://{host}/{view_hash}"
        else:
            view_url = f"/{view_hash}"

        if not is_crawler(user_agent, self.sharing.crawler_signatures):
            return ShareResponse(Outcome.REDIRECT, 302, location=view_url)

        description = preview_description(entry.text, self.sharing.preview_description_length)
        html = render_preview(board.preview_title(entry), description, view_url, view_hash)
        logger.debug("Serving share preview", extra={"code": code, "board": board.key})
        return ShareResponse(Outcome.PREVIEW, 200, html)
