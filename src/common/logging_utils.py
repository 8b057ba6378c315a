"""Centralized logging helpers.

Log level comes from the ``DISTTAGS_LOG_LEVEL`` environment variable (the CLI
sets it from ``--loglevel``). Structured fields travel through ``extra=`` so
handlers can pick them up without changing message text.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict

from constants import Constants

_CONFIGURED = False


def configure_logging() -> None:
    """Install a stderr handler on the root logger once; later calls only adjust the level."""
    global _CONFIGURED  # pylint: disable=global-statement
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not _CONFIGURED:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
        _CONFIGURED = True
    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """True when logger would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload, dropping unset fields."""
    return {key: value for key, value in fields.items() if value is not None}
