"""Tests for remapframes.parser — the three mapping grammars."""
from __future__ import annotations

import pytest

from remapframes.errors import IndexOutOfBoundsError, ParseError
from remapframes.parser import (
    Append,
    IntToInt,
    Mark,
    MarkRange,
    RangeToInt,
    RangeToRange,
    iter_directives,
    parse_directives,
)
from remapframes.scanner import FilterKind, FrameRange, ScanContext


def _parse(kind: FilterKind, *lines: str, frame_count: int = 10) -> list[object]:
    ctx = ScanContext(kind=kind, frame_count=frame_count, from_file=False)
    return list(parse_directives(lines, ctx))


def _reindex(*lines: str, frame_count: int = 10) -> list[object]:
    return _parse(FilterKind.REMAP_FRAMES, *lines, frame_count=frame_count)


def _sequence(*lines: str, frame_count: int = 10) -> list[object]:
    return _parse(FilterKind.REMAP_FRAMES_SIMPLE, *lines, frame_count=frame_count)


def _selector(*lines: str, frame_count: int = 10) -> list[object]:
    return _parse(FilterKind.REPLACE_FRAMES_SIMPLE, *lines, frame_count=frame_count)


# ───────────────────────────── Reindex grammar ─────────────────────────────


class TestReindexGrammar:
    def test_int_to_int(self) -> None:
        assert _reindex("3 4") == [IntToInt(3, 4)]

    def test_range_to_int(self) -> None:
        assert _reindex("[0 4] 7") == [RangeToInt(FrameRange(0, 4), 7)]

    def test_range_to_range(self) -> None:
        assert _reindex(" [0 9]  [9 0] ") == [
            RangeToRange(FrameRange(0, 9), FrameRange(9, 0)),
        ]

    def test_comment_and_blank_lines(self) -> None:
        assert _reindex("# 3 4", "", "   ", "\t# x") == []

    def test_bare_range_is_noop(self) -> None:
        assert _reindex("[0 2]") == []

    def test_trailing_newline_is_stripped(self) -> None:
        assert _reindex("3 4\n") == [IntToInt(3, 4)]

    def test_error_column_points_at_bad_token(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("3 x")
        assert exc_info.value.column == 2
        assert str(exc_info.value) == (
            "RemapFrames: Parse Error in mappings at line 1, column 3"
        )

    def test_missing_second_int(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("3")
        assert exc_info.value.column == 1

    def test_unknown_leading_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("  x 3")
        assert exc_info.value.column == 2

    def test_trailing_garbage(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("3 4 5")
        assert exc_info.value.column == 4

    def test_trailing_comment_not_allowed(self) -> None:
        with pytest.raises(ParseError):
            _reindex("3 4 # note")

    def test_trailing_garbage_after_range_to_range(self) -> None:
        with pytest.raises(ParseError):
            _reindex("[0 1] [2 3] 4")

    def test_descending_input_range_rejected(self) -> None:
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            _reindex("[4 2] 1")
        assert exc_info.value.column == 5

    def test_bad_token_after_input_range(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("[0 2] x")
        assert exc_info.value.column == 6

    def test_line_numbers_count_comment_lines(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _reindex("1 2", "# comment", "", "3 y")
        assert exc_info.value.line == 3
        assert "at line 4, column 3" in str(exc_info.value)

    def test_out_of_bounds_literal(self) -> None:
        with pytest.raises(IndexOutOfBoundsError):
            _reindex("10 0")
        assert _reindex("9 0") == [IntToInt(9, 0)]


class TestRangeToRangeInterpolation:
    def test_identity(self) -> None:
        d = RangeToRange(FrameRange(0, 9), FrameRange(0, 9))
        assert d.indices() == list(range(10))

    def test_reversed(self) -> None:
        d = RangeToRange(FrameRange(0, 9), FrameRange(9, 0))
        assert d.indices() == [9 - i for i in range(10)]

    def test_stretch(self) -> None:
        d = RangeToRange(FrameRange(0, 9), FrameRange(0, 4))
        assert d.indices() == [0, 0, 1, 1, 2, 2, 3, 3, 4, 4]

    def test_squeeze(self) -> None:
        d = RangeToRange(FrameRange(0, 4), FrameRange(0, 9))
        assert d.indices() == [0, 2, 4, 6, 8]

    def test_squeeze_reversed(self) -> None:
        d = RangeToRange(FrameRange(0, 4), FrameRange(9, 0))
        assert d.indices() == [9, 7, 5, 3, 1]

    def test_single_source_frame(self) -> None:
        d = RangeToRange(FrameRange(2, 5), FrameRange(5, 5))
        assert d.indices() == [5, 5, 5, 5]

    def test_reversed_stretch_stays_in_range(self) -> None:
        values = RangeToRange(FrameRange(0, 9), FrameRange(3, 0)).indices()
        assert values[0] == 3
        assert values[-1] == 0
        assert all(0 <= v <= 3 for v in values)
        assert values == sorted(values, reverse=True)


# ───────────────────────────── Sequence grammar ─────────────────────────────


class TestSequenceGrammar:
    def test_literals_in_order(self) -> None:
        assert _sequence("0 0 1 2 2") == [Append(v) for v in (0, 0, 1, 2, 2)]

    def test_across_lines(self) -> None:
        assert _sequence("0 1", "  # skip 5", "", "2") == [Append(0), Append(1), Append(2)]

    def test_inline_comment_truncates_line(self) -> None:
        assert _sequence("1 2 # 3 4") == [Append(1), Append(2)]
        assert _sequence("1#2") == [Append(1)]

    def test_invalid_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _sequence("1,2")
        assert exc_info.value.column == 1
        assert str(exc_info.value).startswith("RemapFramesSimple: Parse Error")

    def test_brackets_not_allowed(self) -> None:
        with pytest.raises(ParseError):
            _sequence("[0 2]")

    def test_adjacent_minus_starts_new_literal(self) -> None:
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            _sequence("3-4")
        assert exc_info.value.column == 1


# ───────────────────────────── Selector grammar ─────────────────────────────


class TestSelectorGrammar:
    def test_range_and_int(self) -> None:
        assert _selector("[2 4] 7") == [MarkRange(FrameRange(2, 4)), Mark(7)]

    def test_descending_range_is_accepted(self) -> None:
        # Unlike the reindex grammar, a reversed range is not an error here.
        assert _selector("[4 2]") == [MarkRange(FrameRange(4, 2))]

    def test_comment_truncates(self) -> None:
        assert _selector("5 # 6", "# 7") == [Mark(5)]

    def test_unknown_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _selector("a")
        assert exc_info.value.column == 0

    def test_garbage_after_directive_starts_a_bad_token(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _selector("[2 4]x")
        assert exc_info.value.column == 5


class TestIterDirectives:
    def test_lazy_until_error(self) -> None:
        ctx = ScanContext(kind=FilterKind.REMAP_FRAMES_SIMPLE, frame_count=5, from_file=True)
        it = iter_directives(["1 2", "x"], ctx)
        assert next(it) == Append(1)
        assert next(it) == Append(2)
        with pytest.raises(ParseError, match="text file at line 2, column 1"):
            next(it)
