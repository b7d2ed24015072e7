from __future__ import annotations

"""
Bintree Structure Data Models.

The asset namespace is a tree keyed by path segments. Nodes are a tagged
variant: a leaf carries an asset binding, a directory carries children.
"""

from dataclasses import dataclass, field
from typing import Dict, Union

from gzbindata.domain.asset_models import Asset

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LeafNode:
    """
    Represents an asset entry in the bintree.

    Attributes:
        asset: The asset bound at this path.
    """
    asset: Asset


@dataclass
class DirectoryNode:
    """
    Represents a directory level in the bintree.

    Attributes:
        children: Mapping of path segment to child node.
    """
    children: Dict[str, "BintreeNode"] = field(default_factory=dict)


BintreeNode = Union[LeafNode, DirectoryNode]
