from __future__ import annotations

"""
Bintree Renderer.

Converts the bintree into two textual forms: an ASCII preview for
diagnostics, and the nested literal embedded in generated source.
"""

from typing import Callable, List

from gzbindata.domain.bintree_models import DirectoryNode, LeafNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_lines(node: DirectoryNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively transform the bintree into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories.

    Args:
        node: Current directory node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = sorted(node.children.keys())
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        child = node.children[entry]

        if isinstance(child, DirectoryNode):
            lines.append(f"{prefix}{connector}{entry}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_lines(child, lines, prefix=new_prefix)
            continue

        lines.append(f"{prefix}{connector}{entry}")


def render_tree_source(
        node: DirectoryNode,
        leaf_expr: Callable[[LeafNode], str],
        indent: str = "",
) -> str:
    """
    Render the bintree as a nested `_Directory`/`_Leaf` expression.

    Children are emitted in sorted order so the output is stable.

    Args:
        node: Directory node to render.
        leaf_expr: Produces the accessor expression bound to a leaf.
        indent: Indentation of the current level.

    Returns:
        str: Python expression text (without trailing newline).
    """
    if not node.children:
        return "_Directory({})"

    inner = indent + "    "
    parts = ["_Directory({"]
    for key in sorted(node.children):
        child = node.children[key]
        if isinstance(child, LeafNode):
            value = f"_Leaf({leaf_expr(child)})"
        else:
            value = render_tree_source(child, leaf_expr, inner)
        parts.append(f"{inner}{key!a}: {value},")
    parts.append(f"{indent}}})")
    return "\n".join(parts)
