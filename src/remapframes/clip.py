"""Clip metadata and the two-clip compatibility check.

The hosting runtime owns real clips; filters only need their metadata and a
way to fetch frame ``n``. Anything with an ``info`` attribute and a
``get_frame`` method satisfies ``Clip``.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from remapframes.errors import StreamMismatchError


@dataclass(frozen=True, slots=True)
class ClipInfo:
    """Geometry, format, frame rate and length of a clip."""

    width: int
    height: int
    format: str
    fps_num: int
    fps_den: int
    num_frames: int

    def __post_init__(self) -> None:
        if self.num_frames < 0:
            raise ValueError(f"num_frames must be >= 0, got {self.num_frames}")


class Clip(Protocol):
    info: ClipInfo

    def get_frame(self, n: int) -> Any: ...


class MismatchCause(Enum):
    NO_MISMATCH = "no_mismatch"
    DIFFERENT_DIMENSIONS = "dimensions"
    DIFFERENT_FORMATS = "formats"
    DIFFERENT_FRAMERATES = "frame rates"
    DIFFERENT_LENGTHS = "lengths"


def find_mismatch(base: ClipInfo, other: ClipInfo | None) -> MismatchCause:
    """Return the first way ``other`` differs from ``base``.

    Checked in order: dimensions, format, frame rate, length.
    """
    if other is None:
        return MismatchCause.NO_MISMATCH
    if base.width != other.width or base.height != other.height:
        return MismatchCause.DIFFERENT_DIMENSIONS
    if base.format != other.format:
        return MismatchCause.DIFFERENT_FORMATS
    if base.fps_num != other.fps_num or base.fps_den != other.fps_den:
        return MismatchCause.DIFFERENT_FRAMERATES
    if base.num_frames != other.num_frames:
        return MismatchCause.DIFFERENT_LENGTHS
    return MismatchCause.NO_MISMATCH


def check_compatible(
    filter_name: str,
    base: ClipInfo,
    other: ClipInfo | None,
    *,
    mismatch: bool = False,
) -> MismatchCause:
    """Raise ``StreamMismatchError`` unless ``other`` can stand in for ``base``.

    ``mismatch=True`` tolerates differing dimensions, formats and frame
    rates. Differing lengths are never tolerated.
    """
    cause = find_mismatch(base, other)
    if cause is MismatchCause.DIFFERENT_LENGTHS:
        raise StreamMismatchError(f"{filter_name}: Clip lengths don't match")
    if cause is not MismatchCause.NO_MISMATCH and not mismatch:
        raise StreamMismatchError(f"{filter_name}: Clip {cause.value} don't match")
    return cause


def common_info(base: ClipInfo, other: ClipInfo | None) -> ClipInfo:
    """Metadata for output drawn from both clips.

    The first property that differs is blanked (dimensions and frame rate to
    0, format to ``""``) so the output reports it as variable.
    """
    cause = find_mismatch(base, other)
    if cause is MismatchCause.DIFFERENT_DIMENSIONS:
        return dataclasses.replace(base, width=0, height=0)
    if cause is MismatchCause.DIFFERENT_FORMATS:
        return dataclasses.replace(base, format="")
    if cause is MismatchCause.DIFFERENT_FRAMERATES:
        return dataclasses.replace(base, fps_num=0, fps_den=0)
    return base
