from __future__ import annotations

"""
Unit tests for generated unit persistence.
"""

import os
from pathlib import Path

import pytest

from gzbindata.core.pipeline.components.writer import plan_unit_paths, write_units
from gzbindata.domain.asset_models import CompiledUnit
from gzbindata.domain.errors import AssetIOError


def test_single_unit_written_to_output_file(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "gen.py"
    units = [CompiledUnit(filename="bindata_gzip.py", content="X = 1\n")]

    written = write_units(units, str(target), split=False)

    assert written == [str(target)]
    assert target.read_text(encoding="utf-8") == "X = 1\n"


def test_split_units_written_into_directory(tmp_path: Path) -> None:
    """TC-01: The split directory is created and each unit keeps its name."""
    out_dir = tmp_path / "pkg"
    units = [
        CompiledUnit(filename="a_txt.py", content="A = 1\n"),
        CompiledUnit(filename="common.py", content="C = 1\n"),
    ]

    written = write_units(units, str(out_dir), split=True)

    assert written == [str(out_dir / "a_txt.py"), str(out_dir / "common.py")]
    assert sorted(os.listdir(out_dir)) == ["a_txt.py", "common.py"]


def test_plan_unit_paths_does_not_touch_disk(tmp_path: Path) -> None:
    units = [CompiledUnit(filename="common.py", content="")]
    planned = plan_unit_paths(units, str(tmp_path / "later"), split=True)
    assert planned == [str(tmp_path / "later" / "common.py")]
    assert not (tmp_path / "later").exists()


def test_write_failure_raises_asset_io_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    units = [CompiledUnit(filename="x.py", content="")]

    with pytest.raises(AssetIOError):
        write_units(units, str(blocker / "sub"), split=True)
