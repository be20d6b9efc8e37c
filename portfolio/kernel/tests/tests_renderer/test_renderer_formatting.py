"""
Portfolio Renderer — Value Formatting Tests

Card dates and description truncation.
"""

from datetime import date, datetime

import pytest

from portfolio.kernel.renderer import format_date, truncate_to_first_line


class TestFormatDate:
    @pytest.mark.parametrize("value,expected", [
        ("2018-10-15", "Oct 15, 2018"),
        ("2024-01-05T10:30:00Z", "Jan 5, 2024"),
        (date(2020, 2, 29), "Feb 29, 2020"),
        (datetime(2019, 12, 3, 8, 0), "Dec 3, 2019"),
        (0, "Jan 1, 1970"),
    ])
    def test_formats(self, value, expected):
        assert format_date(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value):
        assert format_date(value) == "No date"

    @pytest.mark.parametrize("value", ["soon", "2024-13-45", True])
    def test_invalid(self, value):
        assert format_date(value) == "Invalid date"


class TestTruncateToFirstLine:
    def test_empty(self):
        assert truncate_to_first_line("") == ""

    def test_single_sentence_untouched(self):
        assert truncate_to_first_line("A single line without breaks") == "A single line without breaks"

    def test_first_sentence_kept(self):
        text = "Join us to learn how edge functions speed up delivery. Bring your questions."
        assert truncate_to_first_line(text) == "Join us to learn how edge functions speed up delivery..."

    def test_short_first_sentence_absorbs_next(self):
        text = "Short. Second sentence here. Third."
        assert truncate_to_first_line(text) == "Short. Second sentence here..."

    def test_short_first_sentence_alone_when_pair_too_long(self):
        text = "Short. " + "x" * 130 + ". End."
        assert truncate_to_first_line(text) == "Short..."

    def test_stops_at_newline(self):
        text = "First line that is long enough to stand alone\nsecond line"
        assert truncate_to_first_line(text) == "First line that is long enough to stand alone..."

    def test_long_sentence_cut_at_word_boundary(self):
        text = " ".join(["word"] * 50)
        result = truncate_to_first_line(text)
        assert result.endswith("...")
        body = result[:-3]
        assert len(body) <= 120
        assert body.split(" ") == ["word"] * 24

    def test_custom_limit(self):
        assert truncate_to_first_line("alpha beta gamma delta", limit=11) == "alpha beta..."
