from __future__ import annotations

"""
Release Mode Generator.

Emits the embedded form of each asset: a data binding holding the gzip
stream as bytes literals and an accessor returning the asset object with
its compile-time metadata.
"""

import hashlib
import io
import logging
import os
import stat
from typing import TextIO

from gzbindata.core.generation import templates
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.core.processing.compressor import compress_file
from gzbindata.domain.asset_models import Asset, AssetMetadata, CompiledUnit
from gzbindata.domain.errors import AssetIOError

logger = logging.getLogger(__name__)

_HASH_CHUNK_SIZE = 64 * 1024

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def write_release_asset(w: TextIO, asset: Asset, options: GenerationOptions) -> int:
    """
    Write the release entry (data binding + accessor) for one asset.

    Args:
        w: Destination text stream.
        asset: Asset to embed.
        options: Generation settings.

    Returns:
        int: Number of compressed bytes embedded.

    Raises:
        AssetIOError: If the source file cannot be read.
    """
    w.write("\n\n")
    compressed = compress_file(w, asset.path, asset.func)
    meta = collect_metadata(asset, options)

    w.write(templates.TMPL_RELEASE_ACCESSOR % {
        "func": asset.func,
        "name": ascii(asset.name),
        "size": meta.size,
        "md5_checksum": repr(meta.md5_checksum),
        "mode": meta.mode,
        "mod_time": meta.mod_time,
    })

    logger.debug(f"Release entry written for '{asset.name}' ({meta.size} -> {compressed} bytes).")
    return compressed


def render_release_unit(asset: Asset, options: GenerationOptions) -> CompiledUnit:
    """
    Produce the standalone unit holding one asset (split output).

    Args:
        asset: Asset to embed.
        options: Generation settings.

    Returns:
        CompiledUnit: The `<func>.py` unit.
    """
    buf = io.StringIO()
    buf.write(templates.TMPL_UNIT_HEADER % {"package": options.package, "name": ascii(asset.name)})
    buf.write(templates.TMPL_UNIT_IMPORT_RELEASE)
    compressed = write_release_asset(buf, asset, options)
    return CompiledUnit(
        filename=f"{asset.func}.py",
        content=buf.getvalue(),
        assets=(asset.name,),
        compressed_size=compressed,
    )


def collect_metadata(asset: Asset, options: GenerationOptions) -> AssetMetadata:
    """
    Gather size, mode, modification time and checksum of an asset.

    The mode override applies when it is non-zero, the modification time
    override when it is positive.

    Raises:
        AssetIOError: If the file cannot be inspected or read.
    """
    try:
        st = os.stat(asset.path)
    except OSError as e:
        raise AssetIOError(f"Failed to stat asset '{asset.path}': {e}") from e

    mode = options.mode or stat.S_IMODE(st.st_mode)
    mod_time = options.mod_time if options.mod_time > 0 else int(st.st_mtime)

    checksum = ""
    if options.md5_checksum:
        checksum = md5_file(asset.path)

    return AssetMetadata(size=st.st_size, mode=mode, mod_time=mod_time, md5_checksum=checksum)


def md5_file(path: str) -> str:
    """
    Compute the MD5 hex digest of a file's content.

    Raises:
        AssetIOError: If the file cannot be read.
    """
    h = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_HASH_CHUNK_SIZE), b""):
                h.update(chunk)
    except OSError as e:
        raise AssetIOError(f"Failed to checksum asset '{path}': {e}") from e
    return h.hexdigest()
