from __future__ import annotations

"""
Debug Mode Generator.

Emits accessors that read the original files from disk at call time
instead of embedding them. In dev mode the files are resolved against the
generated module's ROOT_DIR variable rather than their absolute path.
"""

import io
import logging
import os
from typing import TextIO

from gzbindata.core.generation import templates
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.domain.asset_models import Asset, CompiledUnit

logger = logging.getLogger(__name__)


def write_debug_asset(w: TextIO, asset: Asset, options: GenerationOptions) -> int:
    """
    Write the disk-reading accessor of one asset.

    Returns:
        int: Always 0, nothing is embedded.
    """
    if options.dev:
        w.write(templates.TMPL_DEV_ACCESSOR % {
            "func": asset.func,
            "name": ascii(asset.name),
        })
    else:
        w.write(templates.TMPL_DEBUG_ACCESSOR % {
            "func": asset.func,
            "name": ascii(asset.name),
            "path": ascii(os.path.abspath(asset.path)),
        })

    logger.debug(f"Debug accessor written for '{asset.name}'.")
    return 0


def render_debug_unit(asset: Asset, options: GenerationOptions) -> CompiledUnit:
    """Produce the standalone debug unit of one asset (split output)."""
    buf = io.StringIO()
    buf.write(templates.TMPL_UNIT_HEADER % {"package": options.package, "name": ascii(asset.name)})
    if options.dev:
        buf.write(templates.TMPL_UNIT_IMPORT_DEV)
    else:
        buf.write(templates.TMPL_UNIT_IMPORT_DEBUG)
    write_debug_asset(buf, asset, options)
    return CompiledUnit(filename=f"{asset.func}.py", content=buf.getvalue(), assets=(asset.name,))


def debug_runtime(options: GenerationOptions) -> str:
    """Render the `_load_from_disk` helper (and ROOT_DIR in dev mode)."""
    text = templates.TMPL_DEBUG_RUNTIME % {
        "mode": options.mode,
        "mod_time": options.mod_time,
        "md5_checksum": repr(options.md5_checksum),
    }
    if options.dev:
        text += templates.TMPL_DEV_RUNTIME
    return text
