from __future__ import annotations

"""
Unit tests for path filtering and input discovery.

Verifies:
1. Regex compilation, including error reporting for bad patterns.
2. Include/ignore semantics.
3. Recursive and flat directory walks with deterministic ordering.
"""

import os
import re
from pathlib import Path
from typing import List

import pytest

from gzbindata.core.pipeline.components.filters import (
    compile_patterns,
    compile_prefix,
    matches_any,
    matches_include,
)
from gzbindata.core.services.scanner import find_input_files, parse_input
from gzbindata.domain.asset_models import InputConfig
from gzbindata.domain.errors import ConfigInvalidError, InputUnavailableError


def _rel(paths: List[str], root: Path) -> List[str]:
    return [os.path.relpath(p, root).replace("\\", "/") for p in paths]


def test_compile_patterns_rejects_invalid_regex() -> None:
    """TC-01: A malformed pattern is a configuration error, not a silent skip."""
    with pytest.raises(ConfigInvalidError):
        compile_patterns([r"^valid", r"[broken"], "ignore")


def test_compile_prefix_empty_is_none() -> None:
    assert compile_prefix("") is None
    assert isinstance(compile_prefix("^static/"), re.Pattern)


def test_matches_any_and_include() -> None:
    compiled = compile_patterns([r"\.tmp$", r"/\.git/"])
    assert matches_any("a/b.tmp", compiled) is True
    assert matches_any("repo/.git/config", compiled) is True
    assert matches_any("a/b.txt", compiled) is False

    assert matches_include("anything", []) is True
    assert matches_include("a.css", compile_patterns([r"\.css$"])) is True
    assert matches_include("a.js", compile_patterns([r"\.css$"])) is False


def test_parse_input_recursive_suffix() -> None:
    assert parse_input("assets/...") == InputConfig(path="assets", recursive=True)
    assert parse_input("assets") == InputConfig(path="assets", recursive=False)
    assert parse_input("./assets/") == InputConfig(path="assets", recursive=False)


def test_flat_walk_skips_subdirectories(sample_assets: Path) -> None:
    """TC-02: A non-recursive directory input only yields its own files."""
    files = find_input_files([InputConfig(str(sample_assets))], [], [])
    assert _rel(files, sample_assets) == ["index.html"]


def test_recursive_walk_is_sorted(sample_assets: Path) -> None:
    files = find_input_files([InputConfig(str(sample_assets), recursive=True)], [], [])
    assert _rel(files, sample_assets) == ["index.html", "data/foo.txt", "data/img/a.png"]


def test_ignore_prunes_directories(sample_assets: Path) -> None:
    """TC-03: Ignored directories are not descended into."""
    ignore = compile_patterns([r"/img$"])
    files = find_input_files([InputConfig(str(sample_assets), recursive=True)], [], ignore)
    assert _rel(files, sample_assets) == ["index.html", "data/foo.txt"]


def test_include_filters_files(sample_assets: Path) -> None:
    include = compile_patterns([r"\.txt$"])
    files = find_input_files([InputConfig(str(sample_assets), recursive=True)], include, [])
    assert _rel(files, sample_assets) == ["data/foo.txt"]


def test_single_file_input(sample_assets: Path) -> None:
    target = sample_assets / "data" / "foo.txt"
    files = find_input_files([InputConfig(str(target))], [], [])
    assert files == [str(target)]


def test_missing_input_raises(tmp_path: Path) -> None:
    with pytest.raises(InputUnavailableError):
        find_input_files([InputConfig(str(tmp_path / "ghost"))], [], [])
