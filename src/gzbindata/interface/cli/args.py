from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from gzbindata.domain.config import DEFAULT_OUTPUT_NAME, DEFAULT_PACKAGE_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the gzbindata CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="gzbindata",
        description=(
            "Embed files as gzip-compressed data in a generated Python module. "
            "Append '/...' to a directory to include its sub-directories."
        ),
    )

    # --- Inputs and Outputs ---
    p.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help="Files or directories to embed (use 'dir/...' for recursion).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output",
        default=None,
        help=f"Output file, or directory with --split (default: ./{DEFAULT_OUTPUT_NAME}).",
    )
    p.add_argument(
        "-p", "--package",
        dest="package",
        default=None,
        help=f"Package name reported by the generated code (default: {DEFAULT_PACKAGE_NAME}).",
    )
    p.add_argument(
        "--prefix",
        dest="prefix",
        default=None,
        help="Regular expression stripped from the start of every asset name.",
    )

    # --- Filtering ---
    p.add_argument(
        "--ignore",
        dest="ignore",
        action="append",
        default=None,
        help="Regular expression of paths to skip (repeatable).",
    )
    p.add_argument(
        "--include",
        dest="include",
        action="append",
        default=None,
        help="Regular expression of paths to keep (repeatable).",
    )

    # --- Metadata Overrides ---
    p.add_argument(
        "--mode",
        dest="mode",
        type=_octal,
        default=None,
        help="Force the permission bits of every asset (octal, e.g. 0644).",
    )
    p.add_argument(
        "--modtime",
        dest="mod_time",
        type=int,
        default=None,
        help="Force the modification time of every asset (unix seconds).",
    )
    p.add_argument(
        "--md5checksum",
        dest="md5_checksum",
        action="store_true",
        help="Record the MD5 checksum of every asset.",
    )

    # --- Generation Strategy ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Generate accessors that read the original files at run time.",
    )
    p.add_argument(
        "--dev",
        action="store_true",
        help="Like --debug but resolve files against the module's ROOT_DIR.",
    )
    p.add_argument(
        "--split",
        action="store_true",
        help="Write one module per asset plus a common module into a directory.",
    )
    p.add_argument(
        "--workers",
        dest="workers",
        type=int,
        default=None,
        help="Number of assets encoded concurrently.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values (command-line values win).",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate everything but write nothing.",
    )
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Print the asset namespace as a tree.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v info, -vv debug).",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write log records to this rotating file.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the compilation result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only values given on the command line are returned, so they can be
    layered over a configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.inputs:
        overrides["input"] = list(args.inputs)

    overrides["output"] = args.output
    overrides["package"] = args.package
    overrides["prefix"] = args.prefix
    overrides["mode"] = args.mode
    overrides["mod_time"] = args.mod_time
    overrides["workers"] = args.workers

    if args.ignore:
        overrides["ignore"] = [x for x in args.ignore if x]
    if args.include:
        overrides["include"] = [x for x in args.include if x]

    # Strategy flags only ever switch features on
    if args.md5_checksum:
        overrides["md5_checksum"] = True
    if args.debug:
        overrides["debug"] = True
    if args.dev:
        overrides["dev"] = True
    if args.split:
        overrides["split"] = True

    return {k: v for k, v in overrides.items() if v is not None}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _octal(value: str) -> int:
    """argparse type for octal permission bits."""
    try:
        return int(value, 8)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid octal mode: {value!r}") from None

