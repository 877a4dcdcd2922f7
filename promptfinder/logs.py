# Logging helpers shared by the search pipeline and the HTTP layer.
# One named logger per component, one handler each, JSON event lines.

from __future__ import annotations

import inspect
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from .settings import settings

_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(h)
    if level or logger.level == logging.NOTSET:
        logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger


def _caller_name() -> str:
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        return caller.f_code.co_name if caller else "unknown"
    finally:
        del frame


def log_event(logger: logging.Logger, level: int, message: str, **details: Any) -> None:
    """
    Emit one structured log line:
        {"severity": "INFO", "message": ..., "timestamp": ..., "function": ..., **details}
    Callers must not pass query text or user identifiers as details.
    """
    if not logger.isEnabledFor(level):
        return
    entry = {
        "severity": logging.getLevelName(level),
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "function": _caller_name(),
    }
    entry.update(details)
    logger.log(level, json.dumps(entry, default=str))
