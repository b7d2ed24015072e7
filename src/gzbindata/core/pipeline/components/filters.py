from __future__ import annotations

"""
Path Filtering Engine.

Implements the regex-based include/ignore logic applied to discovered
input files. Patterns are searched against the slash-normalised path.
"""

import re
from typing import List, Optional, Pattern

from gzbindata.domain.errors import ConfigInvalidError

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str], field: str = "patterns") -> List[Pattern[str]]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Args:
        patterns: List of raw regex strings.
        field: Configuration key the patterns come from (for messages).

    Returns:
        List[re.Pattern]: Compiled regex objects.

    Raises:
        ConfigInvalidError: If a pattern is not a valid regular expression.
    """
    compiled: List[Pattern[str]] = []
    for p in patterns:
        compiled.append(compile_pattern(p, field))
    return compiled


def compile_pattern(pattern: str, field: str = "pattern") -> Pattern[str]:
    """Compile a single regex, reporting failures as configuration errors."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigInvalidError(f"Invalid regular expression in '{field}': {pattern!r} ({e})") from e


def compile_prefix(prefix: str) -> Optional[Pattern[str]]:
    """Compile the prefix pattern; an empty prefix disables stripping."""
    if not prefix:
        return None
    return compile_pattern(prefix, "prefix")


def matches_any(path: str, compiled_patterns: List[Pattern[str]]) -> bool:
    """
    Verify if a path matches at least one compiled regex pattern.

    Args:
        path: Path to evaluate.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(path) for rx in compiled_patterns)


def matches_include(path: str, include_patterns: List[Pattern[str]]) -> bool:
    """
    Verify if a path satisfies the inclusion whitelist.

    An empty whitelist accepts every path.
    """
    if not include_patterns:
        return True
    return any(rx.search(path) for rx in include_patterns)
