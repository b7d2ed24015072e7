from __future__ import annotations

"""
gzbindata: embed files as gzip-compressed data in generated Python modules.
"""

from gzbindata.core.pipeline.engine import compile_assets, translate
from gzbindata.domain.errors import (
    AssetIOError,
    AssetNotFoundError,
    BindataError,
    ConfigInvalidError,
    InputUnavailableError,
    InvalidAssetPathError,
    NameCollisionError,
)
from gzbindata.domain.result_models import CompileResult

__version__ = "0.1.0"

__all__ = [
    "AssetIOError",
    "AssetNotFoundError",
    "BindataError",
    "CompileResult",
    "ConfigInvalidError",
    "InputUnavailableError",
    "InvalidAssetPathError",
    "NameCollisionError",
    "compile_assets",
    "translate",
]
