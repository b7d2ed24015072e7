from __future__ import annotations

"""
Sink handlers behind the compiler's log queue.

Every handler created here is tagged, so that reconfiguration and shutdown
only touch what gzbindata installed. Handlers that pytest's caplog or a
host application attached to the root logger are left alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from gzbindata.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_gzbindata_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# SINK CONSTRUCTION
# ==============================================================================

def _build_sink_handlers(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    """
    Create the stderr and log file handlers requested by `cfg`.

    A log file that cannot be opened is reported on stderr and skipped; the
    compilation itself must not fail because of it.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    sinks: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(console)

    if cfg.log_file:
        log_file = _open_log_file(cfg)
        if log_file is not None:
            log_file.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            sinks.append(log_file)

    for handler in sinks:
        handler.setLevel(level_int)
        _tag_handler(handler)
    return sinks


def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    path = os.path.abspath(str(cfg.log_file))
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"gzbindata: WARNING: cannot open log file '{path}': {e}\n")
        return None
