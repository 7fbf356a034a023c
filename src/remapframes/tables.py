"""Mapping table sinks and the frozen table handed to filters.

Each sink owns one table shape while a build is in progress:

* ``ReindexTable`` — fixed length, identity-initialised, random-access writes.
* ``SequenceTable`` — starts empty, append only.
* ``SelectorTable`` — fixed length of 0/1 flags, zero-initialised.

``freeze()`` turns a sink into an immutable ``MappingTable`` backed by a
read-only numpy array. A sink is never exposed once its build has failed.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from remapframes.scanner import FilterKind, FrameRange

INDEX_DTYPE = np.int64
FLAG_DTYPE = np.uint8


@dataclass(frozen=True, slots=True)
class MappingTable:
    """Immutable per-output-position table.

    ``values[n]`` is the input frame index (reindex/sequence) or the source
    selector flag (selector) for output frame ``n``.
    """

    kind: FilterKind
    values: np.ndarray

    def __post_init__(self) -> None:
        if self.values.ndim != 1:
            raise ValueError(f"values must be 1-D, got shape {self.values.shape}")
        if self.values.flags.writeable:
            raise ValueError("values must be read-only")

    @property
    def frame_count(self) -> int:
        return int(self.values.shape[0])

    def __len__(self) -> int:
        return self.frame_count

    def lookup(self, n: int) -> int:
        """Return the entry for output frame ``n``."""
        if n < 0 or n >= self.frame_count:
            raise IndexError(
                f"frame {n} out of range for table of length {self.frame_count}"
            )
        return int(self.values[n])

    def to_list(self) -> list[int]:
        return [int(v) for v in self.values]


def _frozen(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


class ReindexTable:
    """Output position -> input index, identity until overwritten."""

    kind = FilterKind.REMAP_FRAMES

    def __init__(self, frame_count: int) -> None:
        self._values = np.arange(frame_count, dtype=INDEX_DTYPE)

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def set_at(self, pos: int, value: int) -> None:
        self._values[pos] = value

    def fill_range(self, frames: FrameRange, value: int) -> None:
        self._values[frames.start:frames.end + 1] = value

    def freeze(self) -> MappingTable:
        return MappingTable(self.kind, _frozen(self._values.copy()))


class SequenceTable:
    """Append-built list of input indices; its length is the new clip length."""

    kind = FilterKind.REMAP_FRAMES_SIMPLE

    def __init__(self) -> None:
        self._values: list[int] = []

    def __len__(self) -> int:
        return len(self._values)

    def append(self, value: int) -> None:
        self._values.append(value)

    def freeze(self) -> MappingTable:
        return MappingTable(self.kind, _frozen(np.array(self._values, dtype=INDEX_DTYPE)))


class SelectorTable:
    """Per-position flag: 0 keeps the base clip, 1 takes the source clip."""

    kind = FilterKind.REPLACE_FRAMES_SIMPLE

    def __init__(self, frame_count: int) -> None:
        self._values = np.zeros(frame_count, dtype=FLAG_DTYPE)

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def mark(self, pos: int) -> None:
        self._values[pos] = 1

    def mark_range(self, frames: FrameRange) -> None:
        # A descending range marks nothing.
        if frames.start <= frames.end:
            self._values[frames.start:frames.end + 1] = 1

    def freeze(self) -> MappingTable:
        return MappingTable(self.kind, _frozen(self._values.copy()))


def new_sink(kind: FilterKind, frame_count: int) -> ReindexTable | SequenceTable | SelectorTable:
    """Allocate the empty/initial table for ``kind``."""
    if kind is FilterKind.REMAP_FRAMES:
        return ReindexTable(frame_count)
    if kind is FilterKind.REMAP_FRAMES_SIMPLE:
        return SequenceTable()
    return SelectorTable(frame_count)
