from __future__ import annotations

"""
Input File Discovery Service.

Expands the declared inputs (files or directories, optionally recursive)
into the ordered list of candidate asset paths, applying the include and
ignore patterns. Traversal is sorted so repeated runs see the same order.
"""

import logging
import os
from typing import Iterable, List, Pattern, Sequence

from gzbindata.core.pipeline.components.filters import matches_any, matches_include
from gzbindata.domain.asset_models import InputConfig
from gzbindata.domain.errors import InputUnavailableError

logger = logging.getLogger(__name__)

RECURSIVE_SUFFIX = "/..."


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def parse_input(raw: str) -> InputConfig:
    """
    Translate a command-line input into an InputConfig.

    A trailing '/...' marks a directory to be walked recursively.
    """
    path = raw.replace("\\", "/")
    if path.endswith(RECURSIVE_SUFFIX):
        base = path[:-len(RECURSIVE_SUFFIX)] or "/"
        return InputConfig(path=os.path.normpath(base), recursive=True)
    return InputConfig(path=os.path.normpath(raw), recursive=False)


def find_input_files(
        inputs: Sequence[InputConfig],
        include_rx: List[Pattern[str]],
        ignore_rx: List[Pattern[str]],
) -> List[str]:
    """
    Collect every file selected by the declared inputs.

    Args:
        inputs: Declared input locations, in order.
        include_rx: Compiled whitelist patterns (empty accepts all).
        ignore_rx: Compiled blacklist patterns.

    Returns:
        List[str]: Candidate file paths in discovery order.

    Raises:
        InputUnavailableError: If a declared input does not exist.
    """
    files: List[str] = []

    for entry in inputs:
        if not os.path.lexists(entry.path):
            raise InputUnavailableError(f"Input path does not exist: '{entry.path}'")

        if os.path.isdir(entry.path):
            candidates: Iterable[str] = _walk_directory(entry.path, entry.recursive, ignore_rx)
        else:
            candidates = [entry.path]

        for path in candidates:
            normalized = path.replace("\\", "/")
            if matches_any(normalized, ignore_rx):
                logger.debug(f"Ignored by pattern: {path}")
                continue
            if not matches_include(normalized, include_rx):
                logger.debug(f"Not included by pattern: {path}")
                continue
            files.append(path)

    logger.info(f"Discovered {len(files)} input files from {len(inputs)} inputs.")
    return files

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _walk_directory(root: str, recursive: bool, ignore_rx: List[Pattern[str]]) -> Iterable[str]:
    """Yield regular files below root, sorted per directory level."""
    for current, dirs, files in os.walk(root):
        if recursive:
            # In-place pruning of ignored directories
            dirs[:] = [
                d for d in dirs
                if not matches_any(os.path.join(current, d).replace("\\", "/"), ignore_rx)
            ]
            dirs.sort()
        else:
            dirs[:] = []

        files.sort()
        for file_name in files:
            yield os.path.join(current, file_name)
