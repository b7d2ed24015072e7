from __future__ import annotations

"""
Code Generation Orchestrator.

Produces the CompiledUnits of one run. Per-asset emission can be spread
over a thread pool; results are always assembled in asset order, so the
output is identical to a sequential run.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, Tuple, TypeVar

from gzbindata.core.generation.common import write_header, write_table
from gzbindata.core.generation.debug import render_debug_unit, write_debug_asset
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.core.generation.release import render_release_unit, write_release_asset
from gzbindata.domain.asset_models import Asset, CompiledUnit
from gzbindata.domain.bintree_models import DirectoryNode
from gzbindata.domain.config import COMMON_UNIT_NAME, DEFAULT_OUTPUT_NAME

logger = logging.getLogger(__name__)

T = TypeVar("T")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def generate_units(
        assets: Sequence[Asset],
        tree: DirectoryNode,
        options: GenerationOptions,
        workers: int = 1,
) -> List[CompiledUnit]:
    """
    Generate all source units for the given assets.

    Args:
        assets: Resolved assets in table order.
        tree: Bintree built from the same assets.
        options: Generation settings.
        workers: Maximum number of assets emitted concurrently.

    Returns:
        List[CompiledUnit]: One unit (single mode), or one unit per asset
                            followed by the common unit (split mode).

    Raises:
        AssetIOError: If any asset cannot be read.
    """
    mode_label = "debug" if options.debug else "release"
    logger.info(
        f"Generating {mode_label} code for {len(assets)} assets "
        f"({'split' if options.split else 'single-file'} output)."
    )

    if options.split:
        return _generate_split(assets, tree, options, workers)
    return [_generate_single(assets, tree, options, workers)]

# -----------------------------------------------------------------------------
# OUTPUT STRATEGIES
# -----------------------------------------------------------------------------

def _generate_single(
        assets: Sequence[Asset],
        tree: DirectoryNode,
        options: GenerationOptions,
        workers: int,
) -> CompiledUnit:
    """Header, all assets, bintree, table and API in one unit."""
    def emit(asset: Asset) -> Tuple[str, int]:
        buf = io.StringIO()
        if options.debug:
            size = write_debug_asset(buf, asset, options)
        else:
            size = write_release_asset(buf, asset, options)
        return buf.getvalue(), size

    chunks = _map_ordered(emit, assets, workers)

    out = io.StringIO()
    write_header(out, options)
    compressed = 0
    for text, size in chunks:
        out.write(text)
        compressed += size
    write_table(out, assets, tree, options)

    return CompiledUnit(
        filename=DEFAULT_OUTPUT_NAME,
        content=out.getvalue(),
        assets=tuple(a.name for a in assets),
        compressed_size=compressed,
    )


def _generate_split(
        assets: Sequence[Asset],
        tree: DirectoryNode,
        options: GenerationOptions,
        workers: int,
) -> List[CompiledUnit]:
    """One unit per asset plus the common unit holding table and API."""
    render = render_debug_unit if options.debug else render_release_unit
    units = _map_ordered(lambda asset: render(asset, options), assets, workers)

    common = io.StringIO()
    write_header(common, options)
    write_table(common, assets, tree, options)
    units.append(CompiledUnit(filename=COMMON_UNIT_NAME, content=common.getvalue()))

    return units


def _map_ordered(func: Callable[[Asset], T], assets: Sequence[Asset], workers: int) -> List[T]:
    """Apply func to every asset, keeping input order; the first error propagates."""
    if workers <= 1 or len(assets) <= 1:
        return [func(asset) for asset in assets]

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="AssetEncoder") as executor:
        return list(executor.map(func, assets))
