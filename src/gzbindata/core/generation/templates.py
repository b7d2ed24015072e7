from __future__ import annotations

"""
Generated Source Templates.

Fixed text fragments the generators fill in with %-style placeholders.
Templates must not contain a literal percent sign outside placeholders.
The emitted code depends on the Python standard library only.
"""

import keyword
from typing import FrozenSet

# -----------------------------------------------------------------------------
# FILE HEADERS
# -----------------------------------------------------------------------------

TMPL_FILE_HEADER = '''\
# Code generated by gzbindata. DO NOT EDIT.
"""
Package %(package)s: embedded gzip-compressed assets.

Assets are addressed by their canonical, slash-separated name. Content is
returned still gzip-compressed; use gzip.decompress() to obtain the
original bytes.
"""
'''

TMPL_UNIT_HEADER = '''\
# Code generated by gzbindata. DO NOT EDIT.
# Package %(package)s, asset %(name)s.
'''

TMPL_IMPORT_RELEASE = '''
import datetime
import errno
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Union
'''

TMPL_IMPORT_DEBUG = '''
import datetime
import errno
import gzip
import hashlib
import os
import stat
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Union
'''

TMPL_IMPORT_SPLIT = '''import importlib
'''

TMPL_UNIT_IMPORT_RELEASE = '''
from .common import Asset, AssetInfo, _unix
'''

TMPL_UNIT_IMPORT_DEBUG = '''
from .common import Asset, _load_from_disk
'''

TMPL_UNIT_IMPORT_DEV = '''
from .common import Asset, _load_from_disk, _root_path
'''

TMPL_ALL = '''
__all__ = [
    "ASSETS",
    "Asset",
    "AssetInfo",
    "AssetLoadError",
    "AssetNotFoundError",
    "AssetPanic",
    "AssetTable",
    "get_asset",
    "get_asset_info",
    "list_asset_dir",
    "list_asset_names",
    "load_asset",
    "must_get_asset",%(extra)s
]
'''

# -----------------------------------------------------------------------------
# SHARED RUNTIME
# -----------------------------------------------------------------------------

TMPL_RUNTIME = '''

@dataclass(frozen=True)
class AssetInfo:
    """File information of an embedded asset."""

    name: str
    size: int
    mode: int
    mod_time: datetime.datetime
    md5_checksum: str = ""

    @property
    def is_dir(self) -> bool:
        return False

    @property
    def sys(self) -> None:
        return None


@dataclass(frozen=True)
class Asset:
    """Gzip-compressed content of an asset and its file information."""

    data: bytes
    info: AssetInfo


class AssetNotFoundError(FileNotFoundError):
    """The name does not resolve to an asset (or to a directory)."""

    def __init__(self, name: str) -> None:
        super().__init__(errno.ENOENT, "asset does not exist", name)


class AssetLoadError(OSError):
    """An asset accessor failed to produce its content."""


class AssetPanic(RuntimeError):
    """must_get_asset() could not return the requested asset."""


@dataclass(frozen=True)
class _Leaf:
    func: Callable[[], Asset]


@dataclass(frozen=True)
class _Directory:
    children: Mapping[str, Union[_Leaf, "_Directory"]]


def _unix(seconds: int) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc)


def _canonical(name: str) -> str:
    return name.replace("\\\\", "/")


class AssetTable:
    """Read-only table of asset accessors keyed by canonical name."""

    __slots__ = ("_accessors", "_tree")

    def __init__(self, accessors: Dict[str, Callable[[], Asset]], tree: _Directory) -> None:
        self._accessors = MappingProxyType(dict(accessors))
        self._tree = tree

    def load(self, name: str) -> Asset:
        try:
            accessor = self._accessors[_canonical(name)]
        except KeyError:
            raise AssetNotFoundError(name) from None
        try:
            return accessor()
        except OSError as e:
            raise AssetLoadError(f"asset {name} can't read by error: {e}") from e

    def get(self, name: str) -> bytes:
        return self.load(name).data

    def must_get(self, name: str) -> bytes:
        try:
            return self.get(name)
        except Exception as e:
            raise AssetPanic(f"%(package)s: get_asset({name!r}): {e}") from e

    def info(self, name: str) -> AssetInfo:
        return self.load(name).info

    def names(self) -> List[str]:
        return list(self._accessors)

    def list_dir(self, name: str) -> List[str]:
        node: Union[_Leaf, _Directory] = self._tree
        if name:
            for segment in _canonical(name).split("/"):
                child = node.children.get(segment) if isinstance(node, _Directory) else None
                if child is None:
                    raise AssetNotFoundError(name)
                node = child
        if not isinstance(node, _Directory):
            raise AssetNotFoundError(name)
        return sorted(node.children)
'''

TMPL_DEBUG_RUNTIME = '''

_MODE_OVERRIDE = 0o%(mode)o
_MOD_TIME_OVERRIDE = %(mod_time)d
_MD5_CHECKSUM = %(md5_checksum)s


def _load_from_disk(name: str, path: str) -> Asset:
    st = os.stat(path)
    with open(path, "rb") as f:
        content = f.read()
    mode = _MODE_OVERRIDE or stat.S_IMODE(st.st_mode)
    mod_time = _MOD_TIME_OVERRIDE if _MOD_TIME_OVERRIDE > 0 else int(st.st_mtime)
    info = AssetInfo(
        name=name,
        size=st.st_size,
        md5_checksum=hashlib.md5(content).hexdigest() if _MD5_CHECKSUM else "",
        mode=mode,
        mod_time=_unix(mod_time),
    )
    return Asset(data=gzip.compress(content, compresslevel=9, mtime=0), info=info)
'''

TMPL_DEV_RUNTIME = '''

# Directory the asset names are resolved against. Assign it before the
# first lookup, e.g. ROOT_DIR = os.path.dirname(__file__).
ROOT_DIR = ""


def _root_path(name: str) -> str:
    return os.path.join(ROOT_DIR, name)
'''

TMPL_SPLIT_BIND = '''

def _bind(func: str) -> Callable[[], Asset]:
    def accessor() -> Asset:
        try:
            module = importlib.import_module("." + func, __package__)
            unit = getattr(module, func)
        except (ImportError, AttributeError) as e:
            raise AssetLoadError(f"asset unit {func} can't be imported: {e}") from e
        return unit()

    return accessor

'''

# -----------------------------------------------------------------------------
# PER-ASSET ACCESSORS
# -----------------------------------------------------------------------------

TMPL_RELEASE_ACCESSOR = '''

def %(func)s() -> Asset:
    info = AssetInfo(
        name=%(name)s,
        size=%(size)d,
        md5_checksum=%(md5_checksum)s,
        mode=0o%(mode)o,
        mod_time=_unix(%(mod_time)d),
    )
    return Asset(data=_%(func)s, info=info)
'''

TMPL_DEBUG_ACCESSOR = '''

def %(func)s() -> Asset:
    return _load_from_disk(%(name)s, %(path)s)
'''

TMPL_DEV_ACCESSOR = '''

def %(func)s() -> Asset:
    return _load_from_disk(%(name)s, _root_path(%(name)s))
'''

# -----------------------------------------------------------------------------
# TABLE AND API
# -----------------------------------------------------------------------------

TMPL_TABLE_OPEN = '''
ASSETS = AssetTable(
    {
'''

TMPL_TABLE_CLOSE = '''    },
    _bintree,
)
'''

TMPL_API = '''

def load_asset(name: str) -> Asset:
    """Return the asset object (compressed data and info) for a name."""
    return ASSETS.load(name)


def get_asset(name: str) -> bytes:
    """
    Return the gzip-compressed content of the named asset.

    Raises AssetNotFoundError if the name is unknown and AssetLoadError if
    the asset content cannot be produced.
    """
    return ASSETS.get(name)


def must_get_asset(name: str) -> bytes:
    """
    Like get_asset() but raises AssetPanic on any failure.

    Meant for initialising module-level values where a missing asset is a
    programming error.
    """
    return ASSETS.must_get(name)


def get_asset_info(name: str) -> AssetInfo:
    """Return the file information of the named asset."""
    return ASSETS.info(name)


def list_asset_names() -> List[str]:
    """Return the names of all assets."""
    return ASSETS.names()


def list_asset_dir(name: str) -> List[str]:
    """
    Return the entries below a directory of the asset namespace.

    For assets data/foo.txt and data/img/a.png, list_asset_dir("data")
    returns ["foo.txt", "img"] and list_asset_dir("") returns ["data"].
    A name that denotes an asset or nothing raises AssetNotFoundError.
    """
    return ASSETS.list_dir(name)
'''

# -----------------------------------------------------------------------------
# RESERVED IDENTIFIERS
# -----------------------------------------------------------------------------

# Module-level names the generated runtime defines or imports. Accessor and
# data bindings must never shadow them.
_RUNTIME_NAMES: FrozenSet[str] = frozenset({
    "ASSETS", "Asset", "AssetInfo", "AssetLoadError", "AssetNotFoundError",
    "AssetPanic", "AssetTable", "ROOT_DIR",
    "get_asset", "get_asset_info", "list_asset_dir", "list_asset_names",
    "load_asset", "must_get_asset",
    "_Directory", "_Leaf", "_MD5_CHECKSUM", "_MODE_OVERRIDE",
    "_MOD_TIME_OVERRIDE", "_bind", "_bintree", "_canonical",
    "_load_from_disk", "_root_path", "_unix",
    "Callable", "Dict", "List", "Mapping", "MappingProxyType", "Union",
    "dataclass", "datetime", "errno", "gzip", "hashlib", "importlib",
    "os", "stat",
    "common",
})

# Builtins the runtime calls after the accessors are defined.
_BUILTIN_NAMES: FrozenSet[str] = frozenset({
    "bool", "bytes", "dict", "getattr", "int", "isinstance", "list", "open",
    "property", "sorted", "str", "super",
    "FileNotFoundError", "KeyError", "OSError", "RuntimeError",
})

RESERVED_IDENTIFIERS: FrozenSet[str] = (
    _RUNTIME_NAMES
    | _BUILTIN_NAMES
    | frozenset(keyword.kwlist)
    | frozenset({"__debug__", "__all__", "__name__", "__package__", "__file__"})
)
