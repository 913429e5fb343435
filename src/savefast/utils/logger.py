"""Centralized logger factory used across savefast.

`get_logger` attaches one stream handler per logger name, so "Saving to",
"Skipping empty variable" and failure messages all share the same format.
`set_verbosity` is what the CLI `--log-level` option drives.
"""

from __future__ import annotations
import logging
from typing import Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Create or retrieve a module-scoped logger.

    Args:
        name: Optional logger name (defaults to the package logger 'savefast').

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name or "savefast")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_verbosity(level: int | str) -> None:
    """Set the level of every savefast logger created so far."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root = logging.getLogger("savefast")
    root.setLevel(level)
    for name, obj in logging.Logger.manager.loggerDict.items():
        if name.startswith("savefast.") and isinstance(obj, logging.Logger):
            obj.setLevel(level)
