"""Line scanner shared by the three mapping grammars.

The scanner works on one physical line at a time. Positions are plain
0-based column ints threaded through the readers: each reader takes the
current column and returns the column just past what it consumed.

Public API:

* ``skip_whitespace(text, col)`` — advance past ASCII whitespace.
* ``peek_char(text, col)`` — character at ``col`` or ``""`` at end of line.
* ``read_int(text, col, line, ctx)`` — bounds-checked frame index.
* ``read_range(text, col, line, ctx)`` — ``start end]`` after an opening ``[``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from remapframes.errors import (
    IndexOutOfBoundsError,
    MappingOverflowError,
    MappingSyntaxError,
    ParseError,
)

# C ``isspace`` / ``isdigit`` semantics: ASCII only.
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\v\f")
DIGITS: frozenset[str] = frozenset("0123456789")

# Literals are held in a platform ``int``.
_INT_INFO = np.iinfo(np.int32)
INT_MIN = int(_INT_INFO.min)
INT_MAX = int(_INT_INFO.max)


class FilterKind(Enum):
    """Which grammar (and table shape) a source is parsed with."""

    REMAP_FRAMES = "RemapFrames"
    REMAP_FRAMES_SIMPLE = "RemapFramesSimple"
    REPLACE_FRAMES_SIMPLE = "ReplaceFramesSimple"

    @property
    def filter_name(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FrameRange:
    """Inclusive ``[start end]`` pair as written; ordering is not checked."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class ScanContext:
    """Everything a reader needs to validate a literal and word an error."""

    kind: FilterKind
    frame_count: int
    from_file: bool

    def error(
        self,
        error_cls: type[MappingSyntaxError],
        line: int,
        col: int,
    ) -> MappingSyntaxError:
        return error_cls(
            self.kind.filter_name,
            from_file=self.from_file,
            line=line,
            column=col,
        )


def skip_whitespace(text: str, col: int) -> int:
    """Return the first non-whitespace column at or after ``col``."""
    while col < len(text) and text[col] in WHITESPACE:
        col += 1
    return col


def peek_char(text: str, col: int) -> str:
    """Return the character at ``col``, or ``""`` past the end of the line."""
    if 0 <= col < len(text):
        return text[col]
    return ""


def starts_int(ch: str) -> bool:
    return ch == "-" or ch in DIGITS


def read_int(text: str, col: int, line: int, ctx: ScanContext) -> tuple[int, int]:
    """Read one frame index starting at ``col``.

    Accepts an optional leading ``-`` followed by digits. The literal must fit
    a signed 32-bit int and lie in ``[0, ctx.frame_count)``. Errors report the
    column where the token starts.
    """
    start = col
    if peek_char(text, col) == "-":
        col += 1
    digits_start = col
    while col < len(text) and text[col] in DIGITS:
        col += 1
    if col == digits_start:
        raise ctx.error(ParseError, line, start)

    value = int(text[start:col])
    if value < INT_MIN or value > INT_MAX:
        raise ctx.error(MappingOverflowError, line, start)
    if value < 0 or value >= ctx.frame_count:
        raise ctx.error(IndexOutOfBoundsError, line, start)
    return value, col


def read_range(
    text: str, col: int, line: int, ctx: ScanContext,
) -> tuple[FrameRange, int]:
    """Read ``start end]``; ``col`` must point just past the opening ``[``."""
    col = skip_whitespace(text, col)
    start, col = read_int(text, col, line, ctx)
    col = skip_whitespace(text, col)
    end, col = read_int(text, col, line, ctx)
    col = skip_whitespace(text, col)
    if peek_char(text, col) != "]":
        raise ctx.error(ParseError, line, col)
    return FrameRange(start, end), col + 1
