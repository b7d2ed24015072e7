from __future__ import annotations

"""
Unit tests for the release and debug generators.

Verifies accessor text, metadata collection and overrides, the generation
options mapping, and the structure of single and split outputs.
"""

import hashlib
import os
import stat
from pathlib import Path

import pytest

from gzbindata.core.analysis.bintree_builder import build_bintree
from gzbindata.core.generation import templates
from gzbindata.core.generation.debug import render_debug_unit
from gzbindata.core.generation.generator import generate_units
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.core.generation.release import collect_metadata, md5_file, render_release_unit
from gzbindata.core.naming.resolver import resolve_assets
from gzbindata.domain.asset_models import Asset
from gzbindata.domain.config import COMMON_UNIT_NAME, DEFAULT_OUTPUT_NAME
from gzbindata.domain.errors import AssetIOError


@pytest.fixture
def hello_asset(tmp_path: Path) -> Asset:
    path = tmp_path / "hello.txt"
    path.write_bytes(b"hello")
    return Asset(path=str(path), name="hello.txt", func="hello_txt")


def test_options_from_config_masks_mode_and_implies_debug() -> None:
    """TC-01: Mode keeps permission bits only; dev implies debug."""
    opts = GenerationOptions.from_config({"package": "p", "mode": 0o100644, "dev": True})
    assert opts.mode == 0o644
    assert opts.dev is True
    assert opts.debug is True


def test_templates_render_without_stray_percent() -> None:
    """Every template formats cleanly with its placeholders."""
    templates.TMPL_FILE_HEADER % {"package": "p"}
    templates.TMPL_RUNTIME % {"package": "p"}
    templates.TMPL_ALL % {"extra": ""}
    templates.TMPL_DEBUG_RUNTIME % {"mode": 0, "mod_time": 0, "md5_checksum": "False"}


def test_collect_metadata_uses_stat(hello_asset: Asset) -> None:
    os.chmod(hello_asset.path, 0o640)
    os.utime(hello_asset.path, (1_500_000_000, 1_500_000_000))

    meta = collect_metadata(hello_asset, GenerationOptions(package="p"))

    assert meta.size == 5
    assert meta.mode == stat.S_IMODE(os.stat(hello_asset.path).st_mode)
    assert meta.mod_time == 1_500_000_000
    assert meta.md5_checksum == ""


def test_collect_metadata_applies_overrides(hello_asset: Asset) -> None:
    """TC-02: Non-zero overrides replace the file's own values."""
    opts = GenerationOptions(package="p", mode=0o444, mod_time=42, md5_checksum=True)
    meta = collect_metadata(hello_asset, opts)

    assert meta.mode == 0o444
    assert meta.mod_time == 42
    assert meta.md5_checksum == hashlib.md5(b"hello").hexdigest()


def test_collect_metadata_ignores_negative_mod_time(hello_asset: Asset) -> None:
    os.utime(hello_asset.path, (1_500_000_000, 1_500_000_000))
    meta = collect_metadata(hello_asset, GenerationOptions(package="p", mod_time=-5))
    assert meta.mod_time == 1_500_000_000


def test_md5_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(AssetIOError):
        md5_file(str(tmp_path / "nope"))


def test_release_unit_contents(hello_asset: Asset) -> None:
    unit = render_release_unit(hello_asset, GenerationOptions(package="p", mod_time=7))

    assert unit.filename == "hello_txt.py"
    assert unit.assets == ("hello.txt",)
    assert unit.compressed_size > 0
    assert "from .common import Asset, AssetInfo, _unix" in unit.content
    assert "_hello_txt = (" in unit.content
    assert "def hello_txt() -> Asset:" in unit.content
    assert "mod_time=_unix(7)" in unit.content
    compile(unit.content, "hello_txt.py", "exec")


def test_debug_unit_reads_absolute_path(hello_asset: Asset) -> None:
    unit = render_debug_unit(hello_asset, GenerationOptions(package="p", debug=True))

    assert unit.compressed_size == 0
    assert ascii(os.path.abspath(hello_asset.path)) in unit.content
    assert "_load_from_disk('hello.txt'" in unit.content
    compile(unit.content, "hello_txt.py", "exec")


def test_dev_unit_uses_root_path(hello_asset: Asset) -> None:
    unit = render_debug_unit(hello_asset, GenerationOptions(package="p", debug=True, dev=True))

    assert "_root_path('hello.txt')" in unit.content
    assert hello_asset.path not in unit.content


def test_generate_single_unit(sample_assets: Path) -> None:
    """TC-03: Single mode yields one compilable unit holding every asset."""
    paths = sorted(str(p) for p in sample_assets.rglob("*") if p.is_file())
    assets = resolve_assets(paths)
    units = generate_units(assets, build_bintree(assets), GenerationOptions(package="p"))

    assert len(units) == 1
    assert units[0].filename == DEFAULT_OUTPUT_NAME
    assert units[0].assets == tuple(a.name for a in assets)
    compile(units[0].content, DEFAULT_OUTPUT_NAME, "exec")


def test_generate_split_units(sample_assets: Path) -> None:
    """TC-04: Split mode yields one unit per asset followed by the common unit."""
    paths = sorted(str(p) for p in sample_assets.rglob("*") if p.is_file())
    assets = resolve_assets(paths)
    units = generate_units(assets, build_bintree(assets), GenerationOptions(package="p", split=True))

    assert [u.filename for u in units] == [f"{a.func}.py" for a in assets] + [COMMON_UNIT_NAME]
    common = units[-1].content
    for asset in assets:
        assert f"{asset.func} = _bind({asset.func!r})" in common
    assert "_bintree = _Directory({" in common


def test_parallel_generation_matches_sequential(sample_assets: Path) -> None:
    """TC-05: Worker count does not change the output."""
    paths = sorted(str(p) for p in sample_assets.rglob("*") if p.is_file())
    assets = resolve_assets(paths)
    tree = build_bintree(assets)
    opts = GenerationOptions(package="p", mod_time=1)

    sequential = generate_units(assets, tree, opts, workers=1)
    parallel = generate_units(assets, tree, opts, workers=4)

    assert [u.content for u in sequential] == [u.content for u in parallel]
