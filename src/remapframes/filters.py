"""Remapping filters over host clips.

* ``RemapFrames`` / ``Remf`` — per-frame reindex, optionally pulling frames
  from a second clip of the same shape.
* ``RemapFramesSimple`` / ``Remfs`` — the mapping lists the output frames in
  order and so sets the output length.
* ``ReplaceFramesSimple`` / ``Rfs`` — chooses base or source clip per frame.

Construction either succeeds with a frozen table or raises; filters keep
references to their clips but never release or mutate them.
"""
from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from remapframes.builder import build_table
from remapframes.clip import Clip, ClipInfo, check_compatible, common_info
from remapframes.scanner import FilterKind
from remapframes.tables import MappingTable

log = logging.getLogger(__name__)


class _MappedFilter(ABC):
    kind: FilterKind
    info: ClipInfo
    table: MappingTable

    @property
    def name(self) -> str:
        return self.kind.filter_name

    def _check_frame(self, n: int) -> None:
        if n < 0 or n >= self.info.num_frames:
            raise IndexError(
                f"{self.name}: frame {n} out of range [0, {self.info.num_frames})"
            )

    @abstractmethod
    def frame_source(self, n: int) -> tuple[Clip, int]:
        """Return ``(clip, index)`` that supplies output frame ``n``."""

    def get_frame(self, n: int) -> Any:
        clip, index = self.frame_source(n)
        return clip.get_frame(index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_frames={self.info.num_frames})"


class RemapFrames(_MappedFilter):
    kind = FilterKind.REMAP_FRAMES

    def __init__(
        self,
        baseclip: Clip,
        *,
        filename: str | Path | None = None,
        mappings: str | None = None,
        sourceclip: Clip | None = None,
        mismatch: bool = False,
    ) -> None:
        source_info = sourceclip.info if sourceclip is not None else None
        check_compatible(self.name, baseclip.info, source_info, mismatch=mismatch)
        self.table = build_table(
            self.kind, baseclip.info.num_frames, mappings=mappings, filename=filename,
        )
        self.info = common_info(baseclip.info, source_info)
        self._clip = sourceclip if sourceclip is not None else baseclip
        log.debug("%s: %d frames", self.name, self.info.num_frames)

    def frame_source(self, n: int) -> tuple[Clip, int]:
        self._check_frame(n)
        return self._clip, self.table.lookup(n)


class RemapFramesSimple(_MappedFilter):
    kind = FilterKind.REMAP_FRAMES_SIMPLE

    def __init__(
        self,
        clip: Clip,
        *,
        filename: str | Path | None = None,
        mappings: str | None = None,
    ) -> None:
        self.table = build_table(
            self.kind, clip.info.num_frames, mappings=mappings, filename=filename,
        )
        self.info = dataclasses.replace(clip.info, num_frames=self.table.frame_count)
        self._clip = clip
        log.debug(
            "%s: %d input frames -> %d output frames",
            self.name, clip.info.num_frames, self.info.num_frames,
        )

    def frame_source(self, n: int) -> tuple[Clip, int]:
        self._check_frame(n)
        return self._clip, self.table.lookup(n)


class ReplaceFramesSimple(_MappedFilter):
    kind = FilterKind.REPLACE_FRAMES_SIMPLE

    def __init__(
        self,
        baseclip: Clip,
        sourceclip: Clip,
        *,
        filename: str | Path | None = None,
        mappings: str | None = None,
        mismatch: bool = False,
    ) -> None:
        check_compatible(self.name, baseclip.info, sourceclip.info, mismatch=mismatch)
        self.table = build_table(
            self.kind, baseclip.info.num_frames, mappings=mappings, filename=filename,
        )
        self.info = common_info(baseclip.info, sourceclip.info)
        self._clips = (baseclip, sourceclip)
        log.debug("%s: %d frames", self.name, self.info.num_frames)

    def frame_source(self, n: int) -> tuple[Clip, int]:
        self._check_frame(n)
        return self._clips[self.table.lookup(n)], n


Remf = RemapFrames
Remfs = RemapFramesSimple
Rfs = ReplaceFramesSimple

FILTERS: dict[str, type[_MappedFilter]] = {
    "RemapFrames": RemapFrames,
    "Remf": RemapFrames,
    "RemapFramesSimple": RemapFramesSimple,
    "Remfs": RemapFramesSimple,
    "ReplaceFramesSimple": ReplaceFramesSimple,
    "Rfs": ReplaceFramesSimple,
}


def resolve_kind(name: str) -> FilterKind:
    """Map a filter name or alias to its grammar."""
    try:
        return FILTERS[name].kind
    except KeyError:
        raise ValueError(
            f"Unknown filter {name!r} (one of: {', '.join(FILTERS)})"
        ) from None


def create_filter(name: str, *args: Any, **kwargs: Any) -> _MappedFilter:
    """Instantiate a filter by public name or alias."""
    resolve_kind(name)
    return FILTERS[name](*args, **kwargs)
