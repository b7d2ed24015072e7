from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A sample asset tree on disk.
3. Helpers that import generated modules and split packages.
"""

import importlib
import importlib.util
import os
import re
import sys
import uuid
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

# Content with bytes that stress the literal encoder: quotes, backslashes,
# a UTF-8 BOM in the middle and raw binary.
BINARY_PAYLOAD = b'PNG\x00\x01"quoted"\\back\\slash\xef\xbb\xbfmid-bom\xff\xfe' + bytes(range(256))


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_assets(tmp_path: Path) -> Path:
    """
    Create a small asset tree.

    Structure:
    /site
      /data
        foo.txt          b"hello"
        /img
          a.png          BINARY_PAYLOAD
      index.html
    """
    root = tmp_path / "site"
    (root / "data" / "img").mkdir(parents=True)
    (root / "data" / "foo.txt").write_bytes(b"hello")
    (root / "data" / "img" / "a.png").write_bytes(BINARY_PAYLOAD)
    (root / "index.html").write_text("<html><body>Hi</body></html>\n", encoding="utf-8")
    return root


@pytest.fixture
def base_config(sample_assets: Path, tmp_path: Path) -> Dict[str, Any]:
    """Return a complete configuration embedding the sample tree recursively."""
    return {
        "package": "testassets",
        "output": str(tmp_path / "out" / "assets_gen.py"),
        "input": [{"path": str(sample_assets), "recursive": True}],
        "prefix": "^" + _regex_escape_path(str(sample_assets)) + "/",
        "ignore": [],
        "include": [],
        "mode": 0,
        "mod_time": 0,
        "debug": False,
        "dev": False,
        "split": False,
        "md5_checksum": False,
        "workers": 1,
    }


@pytest.fixture
def load_generated(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], ModuleType]:
    """Return a loader importing a generated single-file module under a unique name."""

    def _load(path: str) -> ModuleType:
        name = f"gzbindata_generated_{uuid.uuid4().hex}"
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)
        return module

    return _load


@pytest.fixture
def load_split_package(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], ModuleType]:
    """Return a loader importing the common unit of a split output directory."""

    def _load(directory: str) -> ModuleType:
        parent, package = os.path.split(os.path.abspath(directory))
        monkeypatch.syspath_prepend(parent)
        importlib.invalidate_caches()
        return importlib.import_module(f"{package}.common")

    return _load


def _regex_escape_path(path: str) -> str:
    return re.escape(path.replace("\\", "/"))
