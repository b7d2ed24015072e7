from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper of a compilation run. Coerces untrusted values
(from the CLI or a JSON file) into typed settings, fills missing keys
with defaults, and rejects configurations that cannot produce a valid
generated module.
"""

import keyword
import logging
import os
from typing import Any, Dict, List, Tuple

from gzbindata.core.pipeline.components.filters import compile_patterns, compile_prefix
from gzbindata.core.services.scanner import parse_input
from gzbindata.domain.asset_models import InputConfig
from gzbindata.domain.config import DEFAULT_OUTPUT_NAME, get_default_config
from gzbindata.domain.errors import ConfigInvalidError, InputUnavailableError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
        cwd: str = "",
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.
        cwd: Directory used to resolve a missing output (defaults to os.getcwd()).

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the list of coercion warnings.

    Raises:
        ConfigInvalidError: Missing/invalid package name, bad output path,
                            invalid regular expression, or a type mismatch
                            in strict mode.
        InputUnavailableError: If a declared input path does not exist.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        raise ConfigInvalidError(
            f"Invalid config type: expected dict, received {type(config).__name__}."
        )

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = ["package", "output", "prefix"]
    bool_fields = ["debug", "dev", "split", "md5_checksum"]
    list_fields = ["ignore", "include"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in list_fields:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["mode"] = _as_int(merged.get("mode"), 0, "mode", warnings, strict, base=8)
    merged["mod_time"] = _as_int(merged.get("mod_time"), 0, "mod_time", warnings, strict)
    merged["workers"] = _as_int(merged.get("workers"), 1, "workers", warnings, strict)
    merged["input"] = _as_inputs(merged.get("input"), warnings, strict)

    # 4. Domain Rules
    if merged["dev"] and not merged["debug"]:
        merged["debug"] = True

    if merged["workers"] < 1:
        msg = f"Invalid field 'workers': {merged['workers']} is below 1."
        if strict:
            raise ConfigInvalidError(msg)
        warnings.append(f"{msg} Using 1.")
        merged["workers"] = 1

    _validate_package(merged["package"])

    # Fail early on malformed patterns
    compile_prefix(merged["prefix"])
    compile_patterns(merged["ignore"], "ignore")
    compile_patterns(merged["include"], "include")

    _validate_inputs(merged["input"])
    merged["output"] = resolve_output(merged["output"], merged["split"], cwd or os.getcwd())

    return merged, warnings


def resolve_output(output: str, split: bool, cwd: str) -> str:
    """
    Compute the absolute output location of a run.

    An empty output means the working directory (split) or the default
    file name inside it (single). A trailing separator in single-file mode
    names a directory that receives the default file name.

    Raises:
        ConfigInvalidError: If the location has the wrong kind (an existing
                            directory for a single file, or an existing
                            file for a split output).
    """
    if not output:
        return cwd if split else os.path.join(cwd, DEFAULT_OUTPUT_NAME)

    path = os.path.expanduser(output)
    if not os.path.isabs(path):
        path = os.path.join(cwd, path)

    if split:
        if os.path.isfile(path):
            raise ConfigInvalidError(f"Split output must be a directory, found a file: '{path}'")
        return os.path.abspath(path)

    if output.endswith(("/", "\\")):
        path = os.path.join(path, DEFAULT_OUTPUT_NAME)
    elif os.path.isdir(path):
        raise ConfigInvalidError(f"Output file is an existing directory: '{path}'")

    path = os.path.abspath(path)
    if not path.endswith(".py"):
        logger.warning(f"Output '{path}' does not end with '.py'; it will not be importable as is.")
    return path


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN RULES
# -----------------------------------------------------------------------------

def _validate_package(package: str) -> None:
    """The package name is used in generated source and must be an identifier."""
    if not package:
        raise ConfigInvalidError("Missing package name.")
    if not package.isascii() or not package.isidentifier() or keyword.iskeyword(package):
        raise ConfigInvalidError(f"Invalid package name '{package}': not an ASCII Python identifier.")


def _validate_inputs(inputs: List[InputConfig]) -> None:
    """Every declared input must exist on disk."""
    for entry in inputs:
        if not os.path.lexists(entry.path):
            raise InputUnavailableError(f"Failed to stat input path '{entry.path}'.")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise ConfigInvalidError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise ConfigInvalidError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        base: int = 10,
) -> int:
    """Coerce integers, accepting numeric strings (in `base`) when not strict."""
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return fallback

    if isinstance(value, str) and not strict:
        try:
            parsed = int(value.strip(), base)
            warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
            return parsed
        except ValueError:
            pass

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise ConfigInvalidError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of strings, supporting single-string values."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        warnings.append(f"Field '{field}' converted from string to list.")
        return [value] if value else list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                if item:
                    out.append(item)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise ConfigInvalidError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise ConfigInvalidError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_inputs(value: Any, warnings: List[str], strict: bool) -> List[InputConfig]:
    """
    Normalize the declared inputs into InputConfig records.

    Accepts InputConfig objects, strings (with the '/...' recursive
    suffix) and dictionaries with 'path' and optional 'recursive' keys.
    """
    if value is None:
        return []
    if isinstance(value, (str, InputConfig, dict)):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigInvalidError(
            f"Invalid field 'input': expected list, received {type(value).__name__}."
        )

    out: List[InputConfig] = []
    for i, item in enumerate(value):
        if isinstance(item, InputConfig):
            out.append(item)
        elif isinstance(item, str) and item.strip():
            out.append(parse_input(item.strip()))
        elif isinstance(item, dict) and isinstance(item.get("path"), str) and item["path"].strip():
            recursive = _as_bool(item.get("recursive"), False, f"input[{i}].recursive", warnings, strict)
            out.append(InputConfig(path=os.path.normpath(item["path"].strip()), recursive=recursive))
        else:
            msg = f"Invalid item in 'input[{i}]': expected a path or {{'path', 'recursive'}}."
            if strict:
                raise ConfigInvalidError(msg)
            warnings.append(f"{msg} Item discarded.")
    return out
