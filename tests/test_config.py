"""Tests for remapframes.config job files."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from remapframes.config import JobConfig, job_config_from_dict, load_job_config


class TestJobConfig:
    def test_defaults(self) -> None:
        config = JobConfig()
        assert config.filter == "RemapFrames"
        assert config.frame_count is None

    def test_load_resolves_relative_paths(self, tmp_path: Path) -> None:
        path = tmp_path / "job.json"
        path.write_text(json.dumps({
            "filter": "Remfs",
            "frame_count": 20,
            "filename": "maps.txt",
            "output": "/abs/table.json",
        }))
        config = load_job_config(path)
        assert config.filter == "Remfs"
        assert config.frame_count == 20
        assert config.filename == tmp_path / "maps.txt"
        assert config.output == Path("/abs/table.json")

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown job config keys: frames"):
            job_config_from_dict({"frames": 3})

    def test_bad_types(self) -> None:
        with pytest.raises(ValueError, match="frame_count"):
            job_config_from_dict({"frame_count": "10"})
        with pytest.raises(ValueError, match="mappings"):
            job_config_from_dict({"mappings": [1, 2]})

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "job.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_job_config(path)

    def test_merged_overrides_only_given_values(self) -> None:
        config = JobConfig(filter="Rfs", frame_count=5, mappings="1")
        merged = config.merged(filter=None, frame_count=8, filename="x.txt")
        assert merged.filter == "Rfs"
        assert merged.frame_count == 8
        assert merged.mappings == "1"
        assert merged.filename == Path("x.txt")

    def test_empty_paths_count_as_missing(self, tmp_path: Path) -> None:
        config = job_config_from_dict({"filename": "", "output": ""}, base_dir=tmp_path)
        assert config.filename is None
        assert config.output is None

    def test_empty_path_override_clears(self) -> None:
        config = JobConfig(filename=Path("maps.txt"))
        assert config.merged(filename="").filename is None
