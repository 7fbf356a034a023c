"""JSON I/O for job configs and table dumps.

orjson-backed, with numpy-safe conversion so frozen tables can be written
directly.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, cast

import numpy as np
import orjson


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(convert_numpy(obj), option=opts))


def dump_json(obj: Any) -> None:
    """Write an object as indented JSON to stdout."""
    sys.stdout.buffer.write(orjson.dumps(convert_numpy(obj), option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


def convert_numpy(obj: Any) -> Any:
    """Convert table arrays and numpy ints (also inside dicts/lists) to plain Python."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, dict):
        return {str(k): convert_numpy(v) for k, v in cast(dict[Any, Any], obj).items()}
    if isinstance(obj, (list, tuple)):
        return [convert_numpy(v) for v in obj]
    return obj
