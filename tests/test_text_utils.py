"""Tests for replyassist.core.utils.text."""

import pytest

from replyassist.core.utils.text import contains_any, normalize_query, normalize_whitespace, truncate_text


class TestNormalize:

    @pytest.mark.parametrize("raw,expected", [
        ("  a \n\t b  ", "a b"),
        ("", ""),
        (None, ""),
        ("보증금은   왜", "보증금은 왜"),
    ])
    def test_whitespace(self, raw, expected):
        assert normalize_whitespace(raw) == expected

    def test_query_is_lower_cased(self):
        assert normalize_query("  Gemini  API ") == "gemini api"


class TestContainsAny:

    def test_match(self):
        assert contains_any("배송 언제 되나요", ("출고", "배송"))

    def test_no_match(self):
        assert not contains_any("정품 맞나요", ("배송",))

    def test_empty_needles_never_match(self):
        assert not contains_any("anything", ("",))
        assert not contains_any("anything", ())


class TestTruncateText:

    def test_returns_empty_for_none(self) -> None:
        assert truncate_text(None, 100) == ""

    def test_returns_original_when_under_limit(self) -> None:
        assert truncate_text("short", 100) == "short"

    def test_returns_original_when_exactly_at_limit(self) -> None:
        text = "x" * 50
        assert truncate_text(text, 50) == text

    def test_truncates_without_suffix(self) -> None:
        assert truncate_text("a" * 100, 50) == "a" * 50

    def test_non_positive_limit(self) -> None:
        assert truncate_text("abc", 0) == ""
