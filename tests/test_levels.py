"""Tests for linelog.levels — ordering, lookup tables and parsing."""

import pytest

from linelog.levels import (
    CRITICAL, DEBUG, ERROR, INFO, TRACE, WARNING,
    LEVEL_COLORS, LEVEL_NAMES, RESET_COLOR,
    Level, format_level_list, parse_level,
)


class TestLevelOrdering:
    """Lower ordinal means more urgent."""

    def test_level_ordering(self):
        assert CRITICAL < ERROR < WARNING < INFO < DEBUG < TRACE

    def test_specific_values(self):
        assert CRITICAL == 0
        assert INFO == 3
        assert TRACE == 5

    def test_tables_are_total(self):
        """Every level has a name and a color entry."""
        for level in Level:
            assert LEVEL_NAMES[level] == level.name
            assert level in LEVEL_COLORS


class TestColors:

    def test_color_codes(self):
        assert LEVEL_COLORS[CRITICAL] == "\033[31;1m"
        assert LEVEL_COLORS[ERROR] == "\033[31m"
        assert LEVEL_COLORS[WARNING] == "\033[33m"
        assert LEVEL_COLORS[INFO] == ""
        assert LEVEL_COLORS[DEBUG] == "\033[2m"
        assert LEVEL_COLORS[TRACE] == "\033[2;3m"

    def test_reset(self):
        assert RESET_COLOR == "\033[0m"


class TestParseLevel:

    @pytest.mark.parametrize("text,expected", [
        ("info", INFO),
        ("INFO", INFO),
        (" Debug ", DEBUG),
        ("warn", WARNING),
        ("fatal", CRITICAL),
        ("5", TRACE),
    ])
    def test_strings(self, text, expected):
        assert parse_level(text) is expected

    def test_level_passthrough(self):
        assert parse_level(ERROR) is ERROR

    def test_int_ordinal(self):
        assert parse_level(2) is WARNING

    @pytest.mark.parametrize("bad", ["loud", "", 6, -1, None, True, 2.0])
    def test_rejects_unknown(self, bad):
        with pytest.raises(ValueError):
            parse_level(bad)


def test_format_level_list_includes_all():
    listing = format_level_list()
    for level in Level:
        assert level.name in listing
    assert listing.index("CRITICAL") < listing.index("TRACE")
