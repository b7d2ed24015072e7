from __future__ import annotations

"""
Compilation Result Data Models.

Defines the summary object handed back from the compilation engine to the
interface layers (CLI, library callers).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of one complete compilation run.

    Attributes:
        output_path: File (single mode) or directory (split mode) written.
        package: Name of the generated package.
        split: Whether the split output strategy was used.
        debug: Whether disk-reading accessors were generated.
        dry_run: If True, nothing was written to disk.
        asset_names: Canonical names of all compiled assets, in table order.
        generated_files: Absolute paths of the units written (or planned).
        total_size: Sum of the uncompressed asset sizes.
        compressed_size: Sum of the embedded gzip payloads (0 in debug mode).
        summary: Free-form execution metrics.
    """
    output_path: str
    package: str
    split: bool
    debug: bool
    dry_run: bool = False
    asset_names: List[str] = field(default_factory=list)
    generated_files: List[str] = field(default_factory=list)
    total_size: int = 0
    compressed_size: int = 0
    summary: Dict[str, Any] = field(default_factory=dict)
