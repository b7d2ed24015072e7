from __future__ import annotations

"""
Shared Runtime Emitter.

Renders the parts every generated output needs exactly once: the module
header with the runtime types, the bintree literal, the lookup table and
the public API functions. In split mode these form the "common" unit and
accessors of other units are bound by identifier convention.
"""

from typing import Sequence, TextIO

from gzbindata.core.analysis.bintree_renderer import render_tree_source
from gzbindata.core.generation import templates
from gzbindata.core.generation.debug import debug_runtime
from gzbindata.core.generation.options import GenerationOptions
from gzbindata.domain.asset_models import Asset
from gzbindata.domain.bintree_models import DirectoryNode, LeafNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def write_header(w: TextIO, options: GenerationOptions) -> None:
    """
    Write the module docstring, imports and runtime definitions.

    Args:
        w: Destination text stream.
        options: Generation settings.
    """
    w.write(templates.TMPL_FILE_HEADER % {"package": options.package})
    w.write(templates.TMPL_IMPORT_DEBUG if options.debug else templates.TMPL_IMPORT_RELEASE)
    if options.split:
        w.write(templates.TMPL_IMPORT_SPLIT)

    extra = '\n    "ROOT_DIR",' if options.dev else ""
    w.write(templates.TMPL_ALL % {"extra": extra})
    w.write(templates.TMPL_RUNTIME % {"package": options.package})

    if options.debug:
        w.write(debug_runtime(options))


def write_table(
        w: TextIO,
        assets: Sequence[Asset],
        tree: DirectoryNode,
        options: GenerationOptions,
) -> None:
    """
    Write the bintree, the lookup table and the API functions.

    In split mode every accessor is first bound to a lazy loader that
    imports the asset's own unit by its identifier.

    Args:
        w: Destination text stream.
        assets: Assets in table order.
        tree: Root of the bintree.
        options: Generation settings.
    """
    if options.split:
        w.write(templates.TMPL_SPLIT_BIND)
        for asset in assets:
            w.write(f"{asset.func} = _bind({asset.func!r})\n")

    w.write("\n\n")
    w.write(f"_bintree = {render_tree_source(tree, _leaf_accessor)}\n")

    w.write(templates.TMPL_TABLE_OPEN)
    for asset in assets:
        w.write(f"        {asset.name!a}: {asset.func},\n")
    w.write(templates.TMPL_TABLE_CLOSE)

    w.write(templates.TMPL_API)


def _leaf_accessor(leaf: LeafNode) -> str:
    return leaf.asset.func
