from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, JSON file, CLI overrides),
compilation, and result rendering.
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from gzbindata.core.pipeline.engine import translate
from gzbindata.core.pipeline.validator import validate_config
from gzbindata.domain.asset_models import InputConfig
from gzbindata.domain.config import get_default_config, load_config_file
from gzbindata.domain.errors import BindataError, ConfigInvalidError, InputUnavailableError
from gzbindata.domain.result_models import CompileResult
from gzbindata.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from gzbindata.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 compile error, 2 configuration
             or input error, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.for_verbosity(args.verbose, args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults vs JSON file) and overrides
    try:
        base_conf = load_config_file(args.config_file) if args.config_file else get_default_config()
        raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

        # 4. Schema validation and normalization
        clean_conf, warnings = validate_config(raw_conf, strict=False)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        if args.dump_config:
            print(json.dumps(_jsonable_config(clean_conf), ensure_ascii=False, indent=2))
            return EXIT_OK

        if not clean_conf["input"]:
            raise ConfigInvalidError("Missing input path: give at least one file or directory.")

    except (ConfigInvalidError, InputUnavailableError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    # 5. Compilation phase
    try:
        result = translate(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Compilation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (ConfigInvalidError, InputUnavailableError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except BindataError as e:
        logger.error(f"Compilation failed: {e}", exc_info=args.verbose > 1)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_COMPILE_ERROR

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if args.print_tree:
        print("\n".join(result.summary.get("tree_lines", [])))

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only keys known to the default configuration are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _jsonable_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    out["input"] = [asdict(i) if isinstance(i, InputConfig) else i for i in cfg.get("input", [])]
    out["mode"] = f"{cfg.get('mode', 0):04o}"
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: CompileResult) -> None:
    """
    Format and print the compilation result to the standard output.

    Args:
        result: The compilation result to render.
    """
    kind = "debug" if result.debug else "release"
    layout = "split" if result.split else "single-file"

    if result.dry_run:
        print(f"Dry run: {len(result.asset_names)} assets would be compiled ({kind}, {layout}).")
    else:
        print(f"Compiled {len(result.asset_names)} assets ({kind}, {layout}).")

    print(f"Package: {result.package}")
    print(f"Output: {result.output_path}")

    if not result.debug:
        print(f"Size: {result.total_size:,} bytes -> {result.compressed_size:,} bytes compressed")

    if result.split:
        print(f"Units: {len(result.generated_files)}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
