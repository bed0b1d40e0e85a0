"""Centralized logging setup and structured debug helpers."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_KEYS = ("event", "component", "action", "target", "outcome", "count")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the CLI.

    The level comes from ``level`` when given, otherwise from the
    GOMODRULES_LOG_LEVEL environment variable, defaulting to INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, None)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)


def add_file_handler(path: str) -> logging.Handler:
    """Attach a file handler to the root logger and return it."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True if debug records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured debug records.

    Well-known keys are kept at the top level; anything else is grouped
    under ``context`` so it cannot collide with LogRecord attributes.
    """
    extra: Dict[str, Any] = {}
    context: Dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None:
            continue
        if key in _CONTEXT_KEYS:
            extra[key] = value
        else:
            context[key] = value
    if context:
        extra["context"] = context
    return extra
