"""Job configuration for building a mapping table outside a host.

A job file is a JSON object::

    {
      "filter": "RemapFrames",
      "frame_count": 100,
      "mappings": "[0 9] [9 0]",
      "filename": "maps.txt",
      "output": "table.json"
    }

Relative ``filename`` / ``output`` paths resolve against the job file's
directory.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from remapframes.io_utils import load_json

DEFAULT_FILTER = "RemapFrames"
_PATH_FIELDS = ("filename", "output")


@dataclass(frozen=True, slots=True)
class JobConfig:
    filter: str = DEFAULT_FILTER
    frame_count: int | None = None
    mappings: str | None = None
    filename: Path | None = None
    output: Path | None = None

    def merged(self, **overrides: Any) -> JobConfig:
        """Return a copy with every non-None override applied.

        An empty path override clears that path.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in _PATH_FIELDS:
            if key in changes:
                changes[key] = Path(changes[key]) if changes[key] else None
        return dataclasses.replace(self, **changes)


def job_config_from_dict(data: dict[str, Any], *, base_dir: Path | None = None) -> JobConfig:
    known = {f.name for f in fields(JobConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown job config keys: {', '.join(unknown)}")

    frame_count = data.get("frame_count")
    if frame_count is not None and (
        isinstance(frame_count, bool) or not isinstance(frame_count, int)
    ):
        raise ValueError(f"frame_count must be an int, got {frame_count!r}")
    mappings = data.get("mappings")
    if mappings is not None and not isinstance(mappings, str):
        raise ValueError("mappings must be a string")

    paths: dict[str, Path | None] = {}
    for key in _PATH_FIELDS:
        raw = data.get(key)
        if raw is None or raw == "":
            paths[key] = None
            continue
        path = Path(str(raw))
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        paths[key] = path

    return JobConfig(
        filter=str(data.get("filter", DEFAULT_FILTER)),
        frame_count=frame_count,
        mappings=mappings,
        filename=paths["filename"],
        output=paths["output"],
    )


def load_job_config(path: Path) -> JobConfig:
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Job config must be a JSON object: {path}")
    return job_config_from_dict(data, base_dir=path.parent)
