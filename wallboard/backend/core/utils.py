"""
Core Utilities.

Shared helpers used across the backend: clock, text normalization, slugs.
"""

import re
import unicodedata
from datetime import datetime, timezone

TITLE_PLACEHOLDER = "(optional)"

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_title(title: str | None) -> str | None:
    """
    Normalize an optional entry title.

    Empty, whitespace-only, and the form placeholder "(optional)" all
    mean "no title".
    """
    if title is None:
        return None
    cleaned = title.strip()
    if not cleaned or cleaned == TITLE_PLACEHOLDER:
        return None
    return cleaned


def slugify(value: str) -> str:
    """Lowercase ASCII slug: runs of anything but [a-z0-9] become one hyphen."""
    ascii_value = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return _SLUG_STRIP.sub("-", ascii_value).strip("-")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, limit: int, marker: str = "…") -> str:
    """Cut text to at most `limit` characters, ending with `marker` when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(marker)] + marker
