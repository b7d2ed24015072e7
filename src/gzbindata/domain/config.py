from __future__ import annotations

"""
Configuration Domain Management.

Defines the default compilation settings and loads user-provided JSON
configuration files. The configuration is a plain dictionary; typing and
normalization are the responsibility of the validator stage.
"""

import json
import logging
import os
from typing import Any, Dict

from gzbindata.domain.errors import ConfigInvalidError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_PACKAGE_NAME = "bindata"
DEFAULT_OUTPUT_NAME = "bindata_gzip.py"
COMMON_UNIT_NAME = "common.py"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default compilation configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Generated module identity
        "package": DEFAULT_PACKAGE_NAME,
        "output": "",

        # Inputs and filtering
        "input": [],
        "prefix": "",
        "ignore": [],
        "include": [],

        # Metadata overrides (0 means "use the file's own value")
        "mode": 0,
        "mod_time": 0,

        # Generation strategy
        "debug": False,
        "dev": False,
        "split": False,
        "md5_checksum": False,

        # Execution
        "workers": 1,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a configuration dictionary from a JSON file.

    Keys missing from the file fall back to the defaults.

    Args:
        path: Location of the JSON configuration file.

    Returns:
        Dict[str, Any]: Defaults merged with the file content.

    Raises:
        ConfigInvalidError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigInvalidError(f"Unable to read config file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigInvalidError(f"Malformed config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigInvalidError(
            f"Config file '{path}' must contain a JSON object, "
            f"found {type(data).__name__}."
        )

    config = get_default_config()
    config.update(data)
    logger.debug(f"Configuration loaded from {os.path.abspath(path)}")
    return config
