from __future__ import annotations

"""
Logging settings for the compiler.

The CLI maps its repeated -v flag and --log-file option onto a
LoggingConfig. Console records are kept short, since they interleave with
the compile summary on the terminal. File records also carry the worker
thread name, so that the output of parallel asset encoders can be told
apart.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Level reached by 0, 1 and 2+ occurrences of -v
VERBOSITY_LEVELS: Tuple[str, ...] = ("WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings consumed by configure_logging().

    Attributes:
        level: Minimum severity name (see _LEVEL_MAP).
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Number of rolled-over files to keep.
        console_fmt: Format of stderr records.
        file_fmt: Format of log file records.
        datefmt: Timestamp format of log file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "gzbindata: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_verbosity(cls, verbosity: int, log_file: Optional[str] = None) -> "LoggingConfig":
        """Build the CLI settings for a -v count, clamped to DEBUG."""
        index = min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)
        return cls(level=VERBOSITY_LEVELS[index], console=True, log_file=log_file or None)
