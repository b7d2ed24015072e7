from __future__ import annotations

"""
Queue-backed logging lifecycle of the compiler.

Asset encoders run on a thread pool and log per asset. Their records go
through a single QueueHandler on the root logger, and a QueueListener
thread writes them to stderr and the optional log file. shutdown_logging()
drains that queue, so that the last records of a run are written before
the CLI returns its exit code.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from gzbindata.infra.logging.config import _LEVEL_MAP, LoggingConfig
from gzbindata.infra.logging.handlers import _build_sink_handlers, _is_our_handler, _tag_handler

_CONFIGURED_FLAG_ATTR: str = "_gzbindata_configured"
_QUEUE_LISTENER_ATTR: str = "_gzbindata_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route root logger records through a queue to the sinks named in `cfg`.

    A second call is a no-op unless `force` is set. With `force`, the
    handlers and listener from the previous call are replaced, which is what
    the CLI does on every invocation so that tests calling main() repeatedly
    get the level they asked for.

    Args:
        cfg: Level, sinks and formats to install.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _detach(root)
    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    try:
        sinks = _build_sink_handlers(cfg, level_int)
        if not sinks:
            return root

        log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
    except (OSError, ValueError, RuntimeError) as e:
        _install_fallback(root, e)
        return root

    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_safe_stop_listener, listener)
    return root


def shutdown_logging() -> None:
    """Flush pending records and remove the handlers installed by configure_logging()."""
    root = logging.getLogger()
    _detach(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _detach(root: logging.Logger) -> None:
    """Stop the current listener, then close and remove our handlers."""
    _safe_stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _install_fallback(root: logging.Logger, error: Exception) -> None:
    """Log straight to stderr when the queue listener cannot be started."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("gzbindata: %(levelname)s: %(message)s"))
    _tag_handler(sh)
    root.addHandler(sh)
    root.warning(f"Queued logging unavailable ({error}); logging directly to stderr.")


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    # QueueListener.stop() fails on a listener that was already stopped
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
    for h in listener.handlers:
        h.close()
