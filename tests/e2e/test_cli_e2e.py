from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the external behavior of the gzbindata command by running it in
a separate process: argument parsing, exit codes, stream output and the
generated artifacts.
"""

import gzip
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.

    Args:
        args: Command line arguments (excluding the interpreter invocation).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: Return code, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["PYTHONIOENCODING"] = "utf-8"

    cmd = [sys.executable, "-m", "gzbindata"] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_compiles_recursive_directory(sample_assets: Path, tmp_path: Path,
                                           load_generated: Callable) -> None:
    """TC-01: A recursive input with a prefix yields an importable module."""
    out = tmp_path / "gen" / "web_assets.py"
    result = run_cli([
        f"{sample_assets}/...",
        "-o", str(out),
        "-p", "web",
        "--prefix", str(sample_assets).replace("\\", "/") + "/",
    ], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "Compiled 3 assets" in result.stdout
    assert out.exists()

    mod = load_generated(str(out))
    assert gzip.decompress(mod.get_asset("data/foo.txt")) == b"hello"


def test_cli_default_output_in_cwd(sample_assets: Path, tmp_path: Path) -> None:
    result = run_cli([str(sample_assets / "index.html")], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "bindata_gzip.py").exists()


def test_cli_json_output(sample_assets: Path, tmp_path: Path) -> None:
    """TC-02: --json prints the compilation result."""
    result = run_cli([
        f"{sample_assets}/...", "-o", str(tmp_path / "a.py"), "--json", "--dry-run",
    ])

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["dry_run"] is True
    assert len(payload["asset_names"]) == 3
    assert not (tmp_path / "a.py").exists()


def test_cli_print_tree(sample_assets: Path, tmp_path: Path) -> None:
    result = run_cli([
        f"{sample_assets}/...",
        "-o", str(tmp_path / "t.py"),
        "--prefix", str(sample_assets).replace("\\", "/") + "/",
        "--print-tree", "--dry-run",
    ])

    assert result.returncode == 0, result.stderr
    assert "├── data/" in result.stdout
    assert "└── index.html" in result.stdout


def test_cli_dump_config(tmp_path: Path) -> None:
    """TC-03: --dump-config prints the effective configuration and exits."""
    config_file = tmp_path / "bindata.json"
    config_file.write_text(json.dumps({"package": "fromfile", "mode": "0600"}), encoding="utf-8")

    result = run_cli(["--config", str(config_file), "-p", "fromcli", "--dump-config"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    dumped = json.loads(result.stdout)
    assert dumped["package"] == "fromcli"
    assert dumped["mode"] == "0600"


def test_cli_missing_input_exit_code(tmp_path: Path) -> None:
    """TC-04: Unavailable inputs exit with code 2."""
    result = run_cli([str(tmp_path / "ghost")], cwd=tmp_path)

    assert result.returncode == 2
    assert "ERROR" in result.stderr


def test_cli_no_input_exit_code(tmp_path: Path) -> None:
    result = run_cli([], cwd=tmp_path)
    assert result.returncode == 2


def test_cli_invalid_package_exit_code(sample_assets: Path, tmp_path: Path) -> None:
    result = run_cli([str(sample_assets), "-p", "not-valid"], cwd=tmp_path)
    assert result.returncode == 2


def test_cli_collision_exit_code(tmp_path: Path) -> None:
    """TC-05: Compilation errors exit with code 1."""
    for folder in ("one", "two"):
        (tmp_path / folder).mkdir()
        (tmp_path / folder / "x.txt").write_text(folder, encoding="utf-8")

    result = run_cli([
        str(tmp_path / "one"), str(tmp_path / "two"),
        "--prefix", r".*/(one|two)/",
        "-o", str(tmp_path / "out.py"),
    ])

    assert result.returncode == 1
    assert "collision" in result.stderr


@pytest.mark.parametrize("flag", ["--debug", "--split"])
def test_cli_strategies_succeed(flag: str, sample_assets: Path, tmp_path: Path) -> None:
    out = tmp_path / "outpkg"
    result = run_cli([f"{sample_assets}/...", "-o", str(out), flag])

    assert result.returncode == 0, result.stderr
    assert out.exists()
