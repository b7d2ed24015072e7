from __future__ import annotations

"""
Asset Domain Data Models.

Defines the records that describe one embeddable input file, the
metadata captured for it at compile time, and the generated source units
produced by the compiler.
"""

from dataclasses import dataclass, field
from typing import Tuple

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class InputConfig:
    """
    One input location declared by the user.

    Attributes:
        path: File or directory to embed.
        recursive: Whether sub-directories of a directory input are walked.
    """
    path: str
    recursive: bool = False


@dataclass(frozen=True)
class Asset:
    """
    Represents one embeddable file.

    Attributes:
        path: Filesystem location of the source file.
        name: Canonical lookup key exposed by the generated API.
        func: Generated-source identifier bound to the data and accessor.
    """
    path: str
    name: str
    func: str


@dataclass(frozen=True)
class AssetMetadata:
    """
    Metadata emitted next to an asset's embedded data.

    Attributes:
        size: Uncompressed byte length of the source file.
        mode: Permission bits.
        mod_time: Modification time in seconds since the epoch.
        md5_checksum: Hex digest of the uncompressed content, or "".
    """
    size: int
    mode: int
    mod_time: int
    md5_checksum: str = ""

# -----------------------------------------------------------------------------
# GENERATED ARTIFACTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompiledUnit:
    """
    One generated source artifact.

    Attributes:
        filename: File name relative to the output location.
        content: Generated Python source text.
        assets: Names of the assets emitted in this unit.
        compressed_size: Total gzip bytes embedded in this unit.
    """
    filename: str
    content: str
    assets: Tuple[str, ...] = field(default_factory=tuple)
    compressed_size: int = 0
