from __future__ import annotations

"""
Core compilation pipeline.

This module coordinates the entire asset compilation workflow:
1. Validates configuration and paths.
2. Discovers the input files and applies include/ignore patterns.
3. Resolves canonical names and generated identifiers.
4. Builds the directory tree of the asset namespace.
5. Generates the source units (single file or split).
6. Writes the units to the output location.
"""

import logging
import os
import time
from typing import Any, Dict, List, Optional, Sequence

from gzbindata.core.analysis.bintree_builder import build_bintree
from gzbindata.core.analysis.bintree_renderer import render_tree_lines
from gzbindata.core.generation.generator import generate_units
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.core.naming.resolver import resolve_assets
from gzbindata.core.pipeline.components.filters import compile_patterns, compile_prefix
from gzbindata.core.pipeline.components.writer import plan_unit_paths, write_units
from gzbindata.core.pipeline.validator import validate_config
from gzbindata.core.services.scanner import find_input_files
from gzbindata.domain.asset_models import Asset
from gzbindata.domain.errors import AssetIOError
from gzbindata.domain.result_models import CompileResult

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def translate(config: Optional[Dict[str, Any]], *, dry_run: bool = False) -> CompileResult:
    """
    Execute the full compilation pipeline from a raw configuration.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, generate everything but write nothing to disk.

    Returns:
        CompileResult: Paths, asset names and size metrics of the run.

    Raises:
        ConfigInvalidError: If the configuration is unusable.
        InputUnavailableError: If an input path does not exist.
        NameCollisionError: If two inputs map to the same name or identifier.
        InvalidAssetPathError: If asset names conflict structurally.
        AssetIOError: If reading an input or writing the output fails.
    """
    logger.info("Compilation started.")

    cfg, warnings = validate_config(config if config is not None else {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    include_rx = compile_patterns(cfg["include"], "include")
    ignore_rx = compile_patterns(cfg["ignore"], "ignore")
    paths = find_input_files(cfg["input"], include_rx, ignore_rx)

    return compile_assets(paths, cfg, dry_run=dry_run)


def compile_assets(
        paths: Sequence[str],
        cfg: Dict[str, Any],
        *,
        dry_run: bool = False,
) -> CompileResult:
    """
    Compile an explicit list of files with a validated configuration.

    Args:
        paths: Input file paths, in table order.
        cfg: Configuration as returned by validate_config.
        dry_run: If True, skip writing the generated units.

    Returns:
        CompileResult: Outcome of the run.
    """
    started = time.perf_counter()

    # -------------------------------------------------------------------------
    # 1) Naming & Namespace
    # -------------------------------------------------------------------------
    assets = resolve_assets(paths, compile_prefix(cfg.get("prefix", "")))
    tree = build_bintree(assets)

    # -------------------------------------------------------------------------
    # 2) Generation
    # -------------------------------------------------------------------------
    options = GenerationOptions.from_config(cfg)
    units = generate_units(assets, tree, options, workers=int(cfg.get("workers", 1)))

    # -------------------------------------------------------------------------
    # 3) Deployment
    # -------------------------------------------------------------------------
    output = cfg["output"]
    if dry_run:
        logger.info("Dry run: Skipping file deployment to final destination.")
        generated = plan_unit_paths(units, output, options.split)
    else:
        generated = write_units(units, output, options.split)

    tree_lines: List[str] = []
    render_tree_lines(tree, tree_lines)

    total_size = _total_size(assets)
    compressed_size = sum(unit.compressed_size for unit in units)
    elapsed = time.perf_counter() - started

    summary = {
        "assets": len(assets),
        "units": len(units),
        "tree_lines": tree_lines,
        "workers": int(cfg.get("workers", 1)),
        "elapsed_seconds": round(elapsed, 3),
    }

    logger.info(
        f"Compiled {len(assets)} assets into {len(units)} unit(s) at {output} "
        f"({total_size} -> {compressed_size} bytes) in {elapsed:.2f}s."
    )

    return CompileResult(
        output_path=output,
        package=options.package,
        split=options.split,
        debug=options.debug,
        dry_run=dry_run,
        asset_names=[a.name for a in assets],
        generated_files=generated,
        total_size=total_size,
        compressed_size=compressed_size,
        summary=summary,
    )


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _total_size(assets: Sequence[Asset]) -> int:
    total = 0
    for asset in assets:
        try:
            total += os.path.getsize(asset.path)
        except OSError as e:
            raise AssetIOError(f"Failed to stat asset '{asset.path}': {e}") from e
    return total
