from __future__ import annotations

from .config import VERBOSITY_LEVELS, LoggingConfig
from .core import configure_logging, shutdown_logging

__all__ = [
    "VERBOSITY_LEVELS",
    "LoggingConfig",
    "configure_logging",
    "shutdown_logging",
]
