"""Logging setup for the employee_management logger hierarchy."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Optional, Union

_LOGGER_PREFIX = __name__.rsplit(".", 1)[0]
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_lock = threading.Lock()
_configured = False


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    stream: Any = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the package logger (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler or logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Undo configure_logging(). Used by tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
