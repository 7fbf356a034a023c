#!/usr/bin/env python3
"""Build a frame mapping table and print it as JSON.

Usage:
    python3 scripts/remap_table.py --filter RemapFrames --frames 100 \
      --mappings "[0 9] [9 0]"
    python3 scripts/remap_table.py --filter Remfs --frames 100 --filename maps.txt
    python3 scripts/remap_table.py --config job.json --output table.json

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from remapframes.builder import build_table
from remapframes.config import JobConfig, load_job_config
from remapframes.errors import RemapError
from remapframes.filters import FILTERS, resolve_kind
from remapframes.io_utils import dump_json, save_json
from remapframes.tables import MappingTable

log = logging.getLogger("remap_table")


def resolve_config(args: argparse.Namespace) -> JobConfig:
    """Job file (if any) with command-line flags layered on top."""
    config = load_job_config(Path(args.config)) if args.config else JobConfig()
    return config.merged(
        filter=args.filter,
        frame_count=args.frames,
        mappings=args.mappings,
        filename=args.filename,
        output=args.output,
    )


def table_payload(config: JobConfig, table: MappingTable) -> dict[str, Any]:
    return {
        "filter": config.filter,
        "variant": table.kind.filter_name,
        "input_frame_count": config.frame_count,
        "output_frame_count": table.frame_count,
        "table": table.values,
    }


def run(config: JobConfig) -> dict[str, Any]:
    if config.frame_count is None:
        raise ValueError("frame count is required (--frames or 'frame_count' in --config)")
    kind = resolve_kind(config.filter)
    log.info(
        "Building %s table for %d frames (filename=%s, inline=%s)",
        kind.filter_name, config.frame_count, config.filename, bool(config.mappings),
    )
    table = build_table(
        kind,
        config.frame_count,
        mappings=config.mappings,
        filename=config.filename,
    )
    payload = table_payload(config, table)
    if config.output is not None:
        save_json(payload, config.output)
        log.info("Wrote %d-entry table to %s", table.frame_count, config.output)
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Build a RemapFrames / RemapFramesSimple / ReplaceFramesSimple table",
    )
    parser.add_argument(
        "--filter", choices=sorted(FILTERS),
        help="Filter name or alias (default: RemapFrames)",
    )
    parser.add_argument("--frames", type=int, help="Number of frames in the input clip")
    parser.add_argument("--mappings", help="Inline mappings text")
    parser.add_argument("--filename", help="Mappings text file")
    parser.add_argument("--config", help="JSON job file; flags override its values")
    parser.add_argument("--output", help="Also write the JSON result to this path")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = resolve_config(args)
        payload = run(config)
    except (RemapError, ValueError, OSError) as exc:
        log.error("%s", exc)
        dump_json({"status": "error", "error_type": type(exc).__name__, "error": str(exc)})
        return 1

    dump_json({"status": "ok", **payload})
    return 0


if __name__ == "__main__":
    sys.exit(main())
