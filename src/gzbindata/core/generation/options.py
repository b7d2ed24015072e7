from __future__ import annotations

"""
Generation Options.

Immutable view of the configuration values that shape emitted code.
"""

from dataclasses import dataclass
from typing import Any, Dict

PERMISSION_MASK = 0o777


@dataclass(frozen=True)
class GenerationOptions:
    """
    Settings consumed by the release and debug generators.

    Attributes:
        package: Name reported by the generated module.
        mode: Forced permission bits for every asset (0 keeps the file's).
        mod_time: Forced unix timestamp for every asset (0 or less keeps the file's).
        md5_checksum: Emit MD5 checksums of the uncompressed content.
        debug: Emit accessors reading the original files at run time.
        dev: Debug accessors resolve names against a ROOT_DIR variable.
        split: One unit per asset plus a shared common unit.
    """
    package: str
    mode: int = 0
    mod_time: int = 0
    md5_checksum: bool = False
    debug: bool = False
    dev: bool = False
    split: bool = False

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "GenerationOptions":
        """Build options from a validated configuration dictionary."""
        dev = bool(cfg.get("dev", False))
        return cls(
            package=cfg["package"],
            mode=int(cfg.get("mode", 0)) & PERMISSION_MASK,
            mod_time=int(cfg.get("mod_time", 0)),
            md5_checksum=bool(cfg.get("md5_checksum", False)),
            debug=bool(cfg.get("debug", False)) or dev,
            dev=dev,
            split=bool(cfg.get("split", False)),
        )
