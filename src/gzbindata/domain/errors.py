from __future__ import annotations

"""
Compilation Error Taxonomy.

Every failure raised while compiling assets derives from BindataError so
that interface layers can trap the whole family at once. Compile-time
errors are fatal for the run; there is no partial-success mode.
"""


class BindataError(Exception):
    """Base class for all gzbindata compilation errors."""


class ConfigInvalidError(BindataError, ValueError):
    """Configuration is unusable (package name, output path, patterns)."""


class InputUnavailableError(BindataError):
    """A declared input path does not exist or cannot be inspected."""


class NameCollisionError(BindataError):
    """
    Two distinct input files resolve to the same lookup name or identifier.

    Attributes:
        first: Path of the asset that claimed the key first.
        second: Path of the asset that collided with it.
        key: The contested name or identifier.
    """

    def __init__(self, first: str, second: str, key: str, kind: str = "name"):
        self.first = first
        self.second = second
        self.key = key
        self.kind = kind
        super().__init__(
            f"Asset {kind} collision on '{key}': '{first}' and '{second}'"
        )


class InvalidAssetPathError(BindataError):
    """An asset name conflicts with the directory structure of another."""


class AssetIOError(BindataError, OSError):
    """Reading, compressing or writing an asset failed."""


class AssetNotFoundError(BindataError, LookupError):
    """A lookup in the asset index did not resolve to a directory."""
