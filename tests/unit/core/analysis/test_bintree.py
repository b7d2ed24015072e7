from __future__ import annotations

"""
Unit tests for the Bintree builder and renderer.

Verifies the namespace structure, directory listing semantics, structural
conflict detection and both textual renderings.
"""

from typing import List

import pytest

from gzbindata.core.analysis.bintree_builder import build_bintree, find_node, list_dir
from gzbindata.core.analysis.bintree_renderer import render_tree_lines, render_tree_source
from gzbindata.domain.asset_models import Asset
from gzbindata.domain.bintree_models import DirectoryNode, LeafNode
from gzbindata.domain.errors import AssetNotFoundError, InvalidAssetPathError


def _assets(*names: str) -> List[Asset]:
    return [Asset(path=f"/src/{n}", name=n, func=n.replace("/", "_").replace(".", "_")) for n in names]


@pytest.fixture
def tree() -> DirectoryNode:
    return build_bintree(_assets("data/foo.txt", "data/img/a.png", "index.html"))


def test_list_root_and_subdirectories(tree: DirectoryNode) -> None:
    """TC-01: Listing returns sorted child segments."""
    assert list_dir(tree, "") == ["data", "index.html"]
    assert list_dir(tree, "data") == ["foo.txt", "img"]
    assert list_dir(tree, "data/img") == ["a.png"]


def test_list_dir_canonicalises_backslashes(tree: DirectoryNode) -> None:
    assert list_dir(tree, "data\\img") == ["a.png"]


def test_list_dir_rejects_leaf_and_missing(tree: DirectoryNode) -> None:
    """TC-02: Leaves and unknown paths are not directories."""
    with pytest.raises(AssetNotFoundError):
        list_dir(tree, "data/foo.txt")
    with pytest.raises(AssetNotFoundError):
        list_dir(tree, "missing")
    with pytest.raises(AssetNotFoundError):
        list_dir(tree, "data/foo.txt/deeper")


def test_find_node_returns_leaf(tree: DirectoryNode) -> None:
    node = find_node(tree, "data/img/a.png")
    assert isinstance(node, LeafNode)
    assert node.asset.name == "data/img/a.png"


def test_empty_asset_list_builds_empty_root() -> None:
    root = build_bintree([])
    assert list_dir(root, "") == []


def test_leaf_used_as_directory_is_rejected() -> None:
    """TC-03: An asset may not live below another asset."""
    with pytest.raises(InvalidAssetPathError):
        build_bintree(_assets("data", "data/foo.txt"))


def test_directory_replaced_by_leaf_is_rejected() -> None:
    with pytest.raises(InvalidAssetPathError):
        build_bintree(_assets("data/foo.txt", "data"))


def test_empty_name_is_rejected() -> None:
    with pytest.raises(InvalidAssetPathError):
        build_bintree([Asset(path="/src/x", name="", func="_")])


def test_render_tree_lines(tree: DirectoryNode) -> None:
    """TC-04: The ASCII preview marks directories with a trailing slash."""
    lines: List[str] = []
    render_tree_lines(tree, lines)

    assert lines == [
        "├── data/",
        "│   ├── foo.txt",
        "│   └── img/",
        "│       └── a.png",
        "└── index.html",
    ]


def test_render_tree_source_is_valid_python(tree: DirectoryNode) -> None:
    """The nested literal evaluates with stand-in node constructors."""
    source = render_tree_source(tree, lambda leaf: repr(leaf.asset.func))

    value = eval(source, {"_Directory": lambda c: ("dir", c), "_Leaf": lambda f: ("leaf", f)})

    assert value[0] == "dir"
    assert value[1]["index.html"] == ("leaf", "index_html")
    assert value[1]["data"][1]["img"][1]["a.png"] == ("leaf", "data_img_a_png")


def test_render_tree_source_empty() -> None:
    assert render_tree_source(DirectoryNode(), repr) == "_Directory({})"
