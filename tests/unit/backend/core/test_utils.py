"""Unit tests for wallboard.backend.core.utils."""

from datetime import datetime, timezone

import pytest

from wallboard.backend.core.utils import (
    collapse_whitespace,
    normalize_title,
    slugify,
    truncate,
    utc_now,
)


class TestUtcNow:
    def test_is_naive(self):
        assert utc_now().tzinfo is None

    def test_is_utc(self):
        delta = datetime.now(timezone.utc).replace(tzinfo=None) - utc_now()
        assert abs(delta.total_seconds()) < 5


class TestNormalizeTitle:
    @pytest.mark.parametrize("title", [None, "", "   ", "(optional)", "  (optional)  "])
    def test_means_no_title(self, title):
        assert normalize_title(title) is None

    def test_trims(self):
        assert normalize_title("  Groceries ") == "Groceries"


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Travel Plans", "travel-plans"),
            ("  Ideas!!  2024 ", "ideas-2024"),
            ("Café Crème", "cafe-creme"),
            ("---", ""),
            ("日本", ""),
        ],
    )
    def test_slugs(self, name, expected):
        assert slugify(name) == expected


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", 200) == "hello"

    def test_exact_limit_unchanged(self):
        assert truncate("a" * 200, 200) == "a" * 200

    def test_long_text_cut_with_marker(self):
        result = truncate("a" * 201, 200)
        assert len(result) == 200
        assert result == "a" * 199 + "…"


class TestCollapseWhitespace:
    def test_collapses_runs(self):
        assert collapse_whitespace("  one\n\n two\tthree  ") == "one two three"
