from __future__ import annotations

"""
Asset Name Resolver.

Derives the canonical lookup name and the generated-source identifier of
each input file. Resolution is a pure function of the path and the prefix
pattern, so recompiling the same inputs reproduces the same bindings.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from gzbindata.core.generation.templates import RESERVED_IDENTIFIERS
from gzbindata.domain.asset_models import Asset
from gzbindata.domain.errors import NameCollisionError

logger = logging.getLogger(__name__)

_INVALID_IDENT_CHARS = re.compile(r"[^A-Za-z0-9_]")
_VALID_IDENT_START = re.compile(r"[A-Za-z_]")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def normalize_separators(path: str) -> str:
    """Convert Windows path separators to forward slashes."""
    return path.replace("\\", "/")


def strip_prefix(path: str, prefix_rx: Optional[Pattern[str]]) -> str:
    """
    Remove the prefix pattern match anchored at the start of the path.

    Stripping is best effort: a pattern that does not match at the start
    leaves the path unchanged.

    Args:
        path: Slash-normalised path.
        prefix_rx: Compiled prefix pattern, or None.

    Returns:
        str: The path without its matched prefix.
    """
    if prefix_rx is None:
        return path
    match = prefix_rx.match(path)
    if match is None:
        return path
    return path[match.end():]


def make_identifier(name: str) -> str:
    """
    Derive a valid Python identifier from a canonical asset name.

    Every character outside [A-Za-z0-9_] becomes '_' and a leading '_' is
    added when the result does not start with a letter or underscore.
    Identifiers that would shadow a keyword or a runtime name, either
    directly or through their '_'-prefixed data binding, get further '_'
    prefixes.

    Args:
        name: Canonical asset name.

    Returns:
        str: The generated identifier.
    """
    ident = _INVALID_IDENT_CHARS.sub("_", name)
    if not _VALID_IDENT_START.match(ident):
        ident = "_" + ident

    while ident in RESERVED_IDENTIFIERS or data_binding(ident) in RESERVED_IDENTIFIERS:
        ident = "_" + ident

    return ident


def data_binding(func: str) -> str:
    """Name of the variable holding an asset's compressed bytes."""
    return "_" + func


def resolve_name(path: str, prefix_rx: Optional[Pattern[str]] = None) -> Tuple[str, str]:
    """
    Produce the (name, identifier) pair for a raw file path.

    Args:
        path: Raw filesystem path.
        prefix_rx: Optional compiled prefix pattern.

    Returns:
        Tuple[str, str]: Canonical name and generated identifier.
    """
    name = strip_prefix(normalize_separators(path), prefix_rx)
    return name, make_identifier(name)


def resolve_assets(
        paths: Iterable[str],
        prefix_rx: Optional[Pattern[str]] = None,
) -> List[Asset]:
    """
    Turn the discovered path list into Asset records.

    Input order is preserved and repeated occurrences of the same path are
    dropped. Two distinct paths claiming the same name, or generated
    bindings that clash with each other, abort the resolution.

    Args:
        paths: Ordered candidate file paths.
        prefix_rx: Optional compiled prefix pattern.

    Returns:
        List[Asset]: Resolved assets in input order.

    Raises:
        NameCollisionError: On a name or identifier collision.
    """
    assets: List[Asset] = []
    seen_paths = set()
    by_name: Dict[str, str] = {}
    by_binding: Dict[str, str] = {}

    for path in paths:
        if path in seen_paths:
            logger.debug(f"Skipping duplicate input: {path}")
            continue
        seen_paths.add(path)

        name, func = resolve_name(path, prefix_rx)

        if name in by_name:
            raise NameCollisionError(by_name[name], path, name, kind="name")

        # Both the accessor and its data variable share the module namespace
        for binding in (func, data_binding(func)):
            if binding in by_binding:
                raise NameCollisionError(by_binding[binding], path, binding, kind="identifier")

        by_name[name] = path
        by_binding[func] = path
        by_binding[data_binding(func)] = path

        assets.append(Asset(path=path, name=name, func=func))
        logger.debug(f"Resolved '{path}' -> name='{name}', func='{func}'")

    return assets
