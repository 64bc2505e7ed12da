"""
Share Endpoint.

GET /s/{code}: redirect people to the entry, serve link previews to
crawlers. Responses are plain text or HTML, not the JSON envelope.
"""

from fastapi import APIRouter, Header, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from wallboard.backend.core.dependencies import DbSession
from wallboard.backend.services.redirect import Outcome, ShareResponder

router = APIRouter()


@router.get("/s/{code}", include_in_schema=False)
async def open_short_link(
    code: str,
    request: Request,
    db: DbSession,
    user_agent: str | None = Header(None),
    x_forwarded_proto: str | None = Header(None),
) -> Response:
    result = await ShareResponder(db).respond(
        code,
        user_agent=user_agent,
        host=request.headers.get("host"),
        forwarded_proto=x_forwarded_proto,
    )
    if result.outcome == Outcome.REDIRECT:
        return RedirectResponse(result.location, status_code=result.status_code)
    if result.outcome == Outcome.PREVIEW:
        return HTMLResponse(result.body, status_code=result.status_code)
    return PlainTextResponse(result.body, status_code=result.status_code)
