"""Tests for character sources."""

import pytest

from dabbrev.core.source import (
    PADDING,
    REPLACEMENT_CHARACTER,
    Cell,
    ChainSource,
    GridLine,
    GridSource,
    TextSource,
)


def _chars(source) -> str:
    return "".join(source)


class TestCell:
    def test_decodes_utf8(self) -> None:
        assert Cell("é".encode()).decode() == "é"

    def test_text_cell(self) -> None:
        assert Cell("x").decode() == "x"

    def test_invalid_bytes_become_replacement(self) -> None:
        assert Cell(b"\xc3").decode() == REPLACEMENT_CHARACTER


class TestGridLine:
    def test_wide_glyph_gets_padding(self) -> None:
        line = GridLine.from_text("a東b")
        assert line.width == 4
        assert line.cells[2] == PADDING
        assert line.text() == "a東b"

    def test_wrapped_flag(self) -> None:
        assert GridLine.from_text("x", wrapped=True).wrapped is True
        assert GridLine.from_text("x").wrapped is False


class TestGridSource:
    def test_hard_lines_get_newlines(self) -> None:
        source = GridSource([GridLine.from_text("one"), GridLine.from_text("two")])
        assert _chars(source) == "one\ntwo\n"

    def test_wrapped_lines_join(self) -> None:
        source = GridSource([GridLine.from_text("hel", wrapped=True), GridLine.from_text("lo")])
        assert _chars(source) == "hello\n"

    def test_padding_cells_skipped(self) -> None:
        source = GridSource([GridLine((Cell("東"), PADDING, Cell("x")))])
        assert _chars(source) == "東x\n"

    def test_empty_grid(self) -> None:
        assert _chars(GridSource([])) == ""

    def test_line_bounds(self) -> None:
        rows = [GridLine.from_text(str(i)) for i in range(5)]
        assert _chars(GridSource(rows, start_line=1, end_line=2)) == "1\n2\n"
        assert _chars(GridSource(rows, start_line=-2)) == "3\n4\n"
        assert _chars(GridSource(rows, end_line=-4)) == "0\n1\n"

    def test_line_bounds_clamped(self) -> None:
        rows = [GridLine.from_text(str(i)) for i in range(3)]
        assert _chars(GridSource(rows, start_line=-100, end_line=100)) == "0\n1\n2\n"
        assert _chars(GridSource(rows, start_line=2, end_line=1)) == ""


class TestTextSource:
    def test_plain_text(self) -> None:
        assert _chars(TextSource("a b\nc")) == "a b\nc\n"

    def test_trailing_newline_not_doubled(self) -> None:
        assert _chars(TextSource("a\n")) == "a\n"
        assert _chars(TextSource("")) == ""

    def test_blank_lines_kept(self) -> None:
        assert _chars(TextSource("a\n\nb\n")) == "a\n\nb\n"

    def test_wrapping(self) -> None:
        source = TextSource("abcdefg\nhi", width=3)
        assert [line.text() for line in source.lines()] == ["abc", "def", "g", "hi"]
        assert [line.wrapped for line in source.lines()] == [True, True, False, False]
        assert _chars(source) == "abcdefg\nhi\n"

    def test_wide_glyph_wraps_early(self) -> None:
        source = TextSource("ab東", width=3)
        assert [line.text() for line in source.lines()] == ["ab", "東"]

    def test_width_too_small(self) -> None:
        with pytest.raises(ValueError):
            TextSource("abc", width=1)

    def test_open_end_leaves_last_line_open(self) -> None:
        assert _chars(TextSource("a b\nc", open_end=True)) == "a b\nc"
        assert _chars(TextSource("a b\nc\n", open_end=True)) == "a b\nc\n"

    def test_open_end_with_wrapping(self) -> None:
        source = TextSource("abcdefg", width=3, open_end=True)
        assert [line.wrapped for line in source.lines()] == [True, True, True]
        assert _chars(source) == "abcdefg"


class TestChainSource:
    def test_sources_concatenate(self) -> None:
        source = ChainSource(TextSource("one"), TextSource("two"))
        assert _chars(source) == "one\ntwo\n"

    def test_empty_chain(self) -> None:
        assert _chars(ChainSource()) == ""
