"""Build frozen mapping tables from a mapping file and/or inline mappings.

Sources are parsed file first, inline text second; because later directives
overwrite earlier ones, inline mappings win wherever both touch the same
frame. Every source is parsed in full before the table is touched, so a
failure anywhere leaves nothing behind.
"""
from __future__ import annotations

import logging
from pathlib import Path

from remapframes.errors import DegenerateInputError, SourceUnavailableError
from remapframes.parser import Directive, parse_directives
from remapframes.scanner import FilterKind, ScanContext, skip_whitespace
from remapframes.tables import MappingTable, new_sink

log = logging.getLogger(__name__)


def _check_frame_count(frame_count: int) -> None:
    if isinstance(frame_count, bool) or not isinstance(frame_count, int):
        raise ValueError(f"frame_count must be an int, got {type(frame_count).__name__}")
    if frame_count < 0:
        raise ValueError(f"frame_count must be non-negative, got {frame_count}")


def _is_blank(text: str) -> bool:
    return skip_whitespace(text, 0) == len(text)


def read_file_directives(
    kind: FilterKind, frame_count: int, filename: str | Path,
) -> list[Directive]:
    """Parse a mapping file, raising ``SourceUnavailableError`` if it can't be opened."""
    ctx = ScanContext(kind=kind, frame_count=frame_count, from_file=True)
    try:
        handle = open(filename, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailableError(
            f"{kind.filter_name}: Failed to open the timecodes file."
        ) from exc
    with handle:
        directives = parse_directives(handle, ctx)
    log.debug("%s: %d directives from %s", kind.filter_name, len(directives), filename)
    return directives


def read_text_directives(
    kind: FilterKind, frame_count: int, mappings: str,
) -> list[Directive]:
    """Parse inline mappings. Blank text yields no directives."""
    if _is_blank(mappings):
        if kind is FilterKind.REMAP_FRAMES_SIMPLE:
            raise DegenerateInputError(f"{kind.filter_name}: Video length cannot be 0")
        return []
    ctx = ScanContext(kind=kind, frame_count=frame_count, from_file=False)
    directives = parse_directives(mappings.split("\n"), ctx)
    log.debug("%s: %d directives from mappings", kind.filter_name, len(directives))
    return directives


def _check_sequence_sources(mappings: str | None, filename: str | Path | None) -> None:
    name = FilterKind.REMAP_FRAMES_SIMPLE.filter_name
    if not mappings and not filename:
        raise DegenerateInputError(f"{name}: Both filename and mappings cannot be empty")
    if mappings and filename:
        raise DegenerateInputError(f"{name}: mappings and filename cannot be used together")


def build_table(
    kind: FilterKind,
    frame_count: int,
    *,
    mappings: str | None = None,
    filename: str | Path | None = None,
) -> MappingTable:
    """Build the table for ``kind`` over a clip of ``frame_count`` frames.

    An empty ``mappings`` string or ``filename`` counts as not supplied.
    """
    _check_frame_count(frame_count)
    if kind is FilterKind.REMAP_FRAMES_SIMPLE:
        _check_sequence_sources(mappings, filename)

    directives: list[Directive] = []
    if filename:
        directives.extend(read_file_directives(kind, frame_count, filename))
    if mappings:
        directives.extend(read_text_directives(kind, frame_count, mappings))

    sink = new_sink(kind, frame_count)
    for directive in directives:
        directive.apply(sink)  # type: ignore[arg-type]

    table = sink.freeze()
    if kind is FilterKind.REMAP_FRAMES_SIMPLE and table.frame_count == 0:
        raise DegenerateInputError(f"{kind.filter_name}: Video length cannot be 0")
    log.debug(
        "%s: built %d-entry table from %d directives",
        kind.filter_name, table.frame_count, len(directives),
    )
    return table


def build_reindex_table(
    frame_count: int,
    *,
    mappings: str | None = None,
    filename: str | Path | None = None,
) -> MappingTable:
    return build_table(
        FilterKind.REMAP_FRAMES, frame_count, mappings=mappings, filename=filename,
    )


def build_sequence_table(
    frame_count: int,
    *,
    mappings: str | None = None,
    filename: str | Path | None = None,
) -> MappingTable:
    return build_table(
        FilterKind.REMAP_FRAMES_SIMPLE, frame_count, mappings=mappings, filename=filename,
    )


def build_selector_table(
    frame_count: int,
    *,
    mappings: str | None = None,
    filename: str | Path | None = None,
) -> MappingTable:
    return build_table(
        FilterKind.REPLACE_FRAMES_SIMPLE, frame_count, mappings=mappings, filename=filename,
    )
