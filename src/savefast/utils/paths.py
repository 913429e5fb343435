"""Destination path helpers.

Keep this file small and deterministic: `normalize_path` is pure and is the
only place that knows about the default container extension.
"""

from __future__ import annotations
from pathlib import Path

DEFAULT_EXTENSION = ".h5"


def normalize_path(path: str | Path, extension: str = DEFAULT_EXTENSION) -> Path:
    """
    Append the container extension when `path` has none.

    Args:
        path: Requested output path.
        extension: Extension to append, with or without the leading dot.

    Returns:
        The path unchanged if it already has a suffix, else with `extension` added.
    """
    p = Path(path)
    if p.suffix:
        return p
    if extension and not extension.startswith("."):
        extension = "." + extension
    return p.with_name(p.name + extension)
