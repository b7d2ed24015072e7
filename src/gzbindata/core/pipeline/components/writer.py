from __future__ import annotations

"""
Generated Unit Persistence.

Writes the compiled units to their final location: a single file, or a
directory holding one file per asset plus the common unit.
"""

import logging
import os
from typing import List, Sequence

from gzbindata.domain.asset_models import CompiledUnit
from gzbindata.domain.errors import AssetIOError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def plan_unit_paths(units: Sequence[CompiledUnit], output: str, split: bool) -> List[str]:
    """
    Compute the absolute destination of every unit.

    Args:
        units: Units produced by the generator.
        output: Output file (single mode) or directory (split mode).
        split: Whether the split strategy was used.

    Returns:
        List[str]: One path per unit, in unit order.
    """
    if not split:
        return [output for _ in units]
    return [os.path.join(output, unit.filename) for unit in units]


def write_units(units: Sequence[CompiledUnit], output: str, split: bool) -> List[str]:
    """
    Persist the generated units, creating parent directories as needed.

    Existing files are overwritten.

    Args:
        units: Units produced by the generator.
        output: Output file (single mode) or directory (split mode).
        split: Whether the split strategy was used.

    Returns:
        List[str]: Paths written.

    Raises:
        AssetIOError: If a directory or file cannot be created.
    """
    paths = plan_unit_paths(units, output, split)
    target_dir = output if split else os.path.dirname(output)

    if target_dir:
        try:
            os.makedirs(target_dir, exist_ok=True)
        except OSError as e:
            raise AssetIOError(f"Failed to create output directory '{target_dir}': {e}") from e

    for unit, path in zip(units, paths):
        write_unit(path, unit.content)

    return paths


def write_unit(path: str, content: str) -> None:
    """
    Write one generated source file.

    Raises:
        AssetIOError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise AssetIOError(f"Failed to write output file '{path}': {e}") from e
    logger.debug(f"Wrote {len(content)} characters to {path}")
