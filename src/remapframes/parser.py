"""Directive parser for the three mapping grammars.

Reindex (``RemapFrames``), one directive per line::

    x y            output frame x shows input frame y
    [x y] z        output frames x..y show input frame z
    [x y] [z w]    output frames x..y show z..w, interpolated (w < z reverses)

Sequence (``RemapFramesSimple``): every integer literal is appended to the
output, in order of appearance.

Selector (``ReplaceFramesSimple``): ``x`` or ``[x y]`` marks frames that are
taken from the source clip instead of the base clip.

In all grammars a line whose first non-blank character is ``#`` is ignored.
The sequence and selector grammars also stop reading a line at any ``#``.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeAlias
from dataclasses import dataclass

from remapframes.errors import IndexOutOfBoundsError, ParseError
from remapframes.scanner import (
    FilterKind,
    FrameRange,
    ScanContext,
    peek_char,
    read_int,
    read_range,
    skip_whitespace,
    starts_int,
)
from remapframes.tables import ReindexTable, SelectorTable, SequenceTable

COMMENT = "#"


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IntToInt:
    target: int
    source: int

    def apply(self, table: ReindexTable) -> None:
        table.set_at(self.target, self.source)


@dataclass(frozen=True, slots=True)
class RangeToInt:
    frames: FrameRange
    source: int

    def apply(self, table: ReindexTable) -> None:
        table.fill_range(self.frames, self.source)


@dataclass(frozen=True, slots=True)
class RangeToRange:
    frames: FrameRange
    sources: FrameRange

    def indices(self) -> list[int]:
        """Input index for each output frame of ``frames``, in order.

        The source span is stretched (or squeezed) over the output range and
        truncated toward zero, so ``[0 9] [9 0]`` yields ``9, 8, ..., 0``.
        """
        count = self.frames.end - self.frames.start + 1
        span = self.sources.end - self.sources.start
        span += 1 if span >= 0 else -1
        step = span / count
        return [int(self.sources.start + step * i) for i in range(count)]

    def apply(self, table: ReindexTable) -> None:
        for offset, source in enumerate(self.indices()):
            table.set_at(self.frames.start + offset, source)


@dataclass(frozen=True, slots=True)
class Append:
    source: int

    def apply(self, table: SequenceTable) -> None:
        table.append(self.source)


@dataclass(frozen=True, slots=True)
class Mark:
    frame: int

    def apply(self, table: SelectorTable) -> None:
        table.mark(self.frame)


@dataclass(frozen=True, slots=True)
class MarkRange:
    frames: FrameRange

    def apply(self, table: SelectorTable) -> None:
        table.mark_range(self.frames)


Directive: TypeAlias = IntToInt | RangeToInt | RangeToRange | Append | Mark | MarkRange


# ---------------------------------------------------------------------------
# Per-grammar line parsers
# ---------------------------------------------------------------------------

def _parse_reindex_line(text: str, line: int, ctx: ScanContext) -> Iterator[Directive]:
    col = skip_whitespace(text, 0)
    ch = peek_char(text, col)
    if ch == "" or ch == COMMENT:
        return

    directive: Directive | None = None
    if starts_int(ch):
        target, col = read_int(text, col, line, ctx)
        col = skip_whitespace(text, col)
        source, col = read_int(text, col, line, ctx)
        directive = IntToInt(target, source)
    elif ch == "[":
        frames, col = read_range(text, col + 1, line, ctx)
        if frames.start > frames.end:
            raise ctx.error(IndexOutOfBoundsError, line, col)
        col = skip_whitespace(text, col)
        ch = peek_char(text, col)
        if starts_int(ch):
            source, col = read_int(text, col, line, ctx)
            directive = RangeToInt(frames, source)
        elif ch == "[":
            sources, col = read_range(text, col + 1, line, ctx)
            directive = RangeToRange(frames, sources)
        elif ch != "":
            raise ctx.error(ParseError, line, col)
    else:
        raise ctx.error(ParseError, line, col)

    col = skip_whitespace(text, col)
    if col != len(text):
        raise ctx.error(ParseError, line, col)
    if directive is not None:
        yield directive


def _parse_sequence_line(text: str, line: int, ctx: ScanContext) -> Iterator[Directive]:
    col = 0
    while col < len(text):
        col = skip_whitespace(text, col)
        ch = peek_char(text, col)
        if ch == "" or ch == COMMENT:
            return
        if not starts_int(ch):
            raise ctx.error(ParseError, line, col)
        source, col = read_int(text, col, line, ctx)
        yield Append(source)


def _parse_selector_line(text: str, line: int, ctx: ScanContext) -> Iterator[Directive]:
    col = 0
    while col < len(text):
        col = skip_whitespace(text, col)
        ch = peek_char(text, col)
        if ch == "" or ch == COMMENT:
            return
        if starts_int(ch):
            frame, col = read_int(text, col, line, ctx)
            yield Mark(frame)
        elif ch == "[":
            frames, col = read_range(text, col + 1, line, ctx)
            yield MarkRange(frames)
        else:
            raise ctx.error(ParseError, line, col)


_LINE_PARSERS = {
    FilterKind.REMAP_FRAMES: _parse_reindex_line,
    FilterKind.REMAP_FRAMES_SIMPLE: _parse_sequence_line,
    FilterKind.REPLACE_FRAMES_SIMPLE: _parse_selector_line,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def iter_directives(lines: Iterable[str], ctx: ScanContext) -> Iterator[Directive]:
    """Yield directives from ``lines`` in source order.

    Raises on the first malformed line; directives already yielded must be
    discarded by the caller.
    """
    parse_line = _LINE_PARSERS[ctx.kind]
    for line, raw in enumerate(lines):
        yield from parse_line(raw.rstrip("\n"), line, ctx)


def parse_directives(lines: Iterable[str], ctx: ScanContext) -> list[Directive]:
    """Parse a whole source; nothing is returned unless every line parses."""
    return list(iter_directives(lines, ctx))
