from __future__ import annotations

"""
Bintree Builder.

Assembles the flat asset list into the hierarchical namespace used by the
directory listing API. The tree is built once per compilation run and
only read afterwards.
"""

import logging
from typing import List, Sequence

from gzbindata.domain.asset_models import Asset
from gzbindata.domain.bintree_models import BintreeNode, DirectoryNode, LeafNode
from gzbindata.domain.errors import AssetNotFoundError, InvalidAssetPathError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_bintree(assets: Sequence[Asset]) -> DirectoryNode:
    """
    Build the root directory node representing the "" path.

    Args:
        assets: Resolved assets, in table order.

    Returns:
        DirectoryNode: Root of the namespace.

    Raises:
        InvalidAssetPathError: If an asset name conflicts with the structure
                               created by another asset.
    """
    root = DirectoryNode()

    for asset in assets:
        if not asset.name:
            raise InvalidAssetPathError(
                f"Asset '{asset.path}' resolves to an empty name; check the prefix pattern."
            )
        _insert(root, asset)

    logger.debug(f"Bintree built with {len(assets)} leaves.")
    return root


def list_dir(root: DirectoryNode, name: str) -> List[str]:
    """
    Return the immediate child segments of a directory in the namespace.

    Args:
        root: Root node produced by build_bintree.
        name: Slash-separated directory name ("" means the root).

    Returns:
        List[str]: Sorted child segment names.

    Raises:
        AssetNotFoundError: If the name denotes an asset or nothing.
    """
    node = find_node(root, name)
    if not isinstance(node, DirectoryNode):
        raise AssetNotFoundError(f"Not a directory in the asset tree: '{name}'")
    return sorted(node.children)


def find_node(root: DirectoryNode, name: str) -> BintreeNode:
    """
    Walk the tree along a slash-separated name.

    Raises:
        AssetNotFoundError: If a segment does not exist.
    """
    node: BintreeNode = root
    if not name:
        return node

    for segment in name.replace("\\", "/").split("/"):
        child = node.children.get(segment) if isinstance(node, DirectoryNode) else None
        if child is None:
            raise AssetNotFoundError(f"No such entry in the asset tree: '{name}'")
        node = child

    return node

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _insert(root: DirectoryNode, asset: Asset) -> None:
    """Create the directory chain for an asset and attach its leaf."""
    segments = asset.name.split("/")
    current = root

    for depth, segment in enumerate(segments[:-1]):
        child = current.children.get(segment)
        if child is None:
            child = DirectoryNode()
            current.children[segment] = child
        elif isinstance(child, LeafNode):
            occupied = "/".join(segments[:depth + 1])
            raise InvalidAssetPathError(
                f"Asset '{asset.name}' needs '{occupied}' as a directory, "
                f"but it is the asset from '{child.asset.path}'."
            )
        current = child

    last = segments[-1]
    existing = current.children.get(last)
    if isinstance(existing, LeafNode):
        raise InvalidAssetPathError(
            f"Asset '{asset.name}' is declared twice ('{existing.asset.path}' and '{asset.path}')."
        )
    if isinstance(existing, DirectoryNode):
        raise InvalidAssetPathError(
            f"Asset '{asset.name}' from '{asset.path}' conflicts with a directory of the same name."
        )

    current.children[last] = LeafNode(asset=asset)
