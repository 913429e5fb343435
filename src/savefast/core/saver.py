"""Fast, uncompressed saving of named variables to an HDF5 container.

Numeric arrays are written as independent, unchunked datasets; everything else
goes into the root record in one pass. This trades file size for write speed.

Standing policies:
  - float64/complex128 arrays are stored as float32/complex64 parts (lossy,
    disable with `SaveConfig(downcast=False)`).
  - zero-element arrays are skipped with a warning.
  - complex arrays are stored as '<name>_r' / '<name>_i' real datasets.
  - a failure half way leaves earlier datasets in the file; there is no rollback.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

import h5py
import numpy as np

from ..io import container
from ..io.guard import AskFn, confirm_overwrite, ensure_parent_dir
from ..utils.config_loader import SaveConfig
from ..utils.logger import get_logger
from ..utils.paths import normalize_path
from .classify import Kind, Variable, classify_all, split_force_flag, unique_names
from .errors import UnresolvedNameError

logger = get_logger(__name__)

__all__ = ["SaveReport", "downcast", "save_variables", "savefast"]


@dataclass
class SaveReport:
    path: Path
    saved: bool = True
    datasets: List[str] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    options: List[str] = field(default_factory=list)


def downcast(arr: np.ndarray) -> np.ndarray:
    """Narrow double precision (real or complex) to single precision; other dtypes pass through."""
    # kind/itemsize so non-native byte orders (">f8") are caught too
    if arr.dtype.kind == "f" and arr.dtype.itemsize == 8:
        return arr.astype(np.float32)
    if arr.dtype.kind == "c" and arr.dtype.itemsize == 16:
        return arr.astype(np.complex64)
    return arr


def _write_numeric(h5: h5py.File, var: Variable, cfg: SaveConfig, report: SaveReport) -> None:
    arr = np.asarray(var.value)
    if cfg.downcast:
        arr = downcast(arr)
    if arr.size == 0:
        logger.warning("Skipping empty variable /%s", var.name)
        report.skipped.append(var.name)
        return
    if var.is_complex:
        report.datasets.extend(container.write_complex(h5, var.name, arr))
    else:
        container.write_dataset(h5, var.name, arr)
        report.datasets.append(var.name)


def save_variables(
    path: str | Path,
    variables: Mapping[str, Any],
    force: bool = False,
    config: Optional[SaveConfig] = None,
    ask: AskFn = input,
) -> SaveReport:
    """
    Save a name -> value mapping to an HDF5 container.

    Args:
        path: Destination; the configured extension is appended if it has none.
        variables: Ordered mapping of variable names to values. Names starting
            with the option marker are ignored.
        force: Overwrite an existing file without asking.
        config: Save settings, defaults to `SaveConfig()`.
        ask: Prompt function used by the overwrite guard.

    Returns:
        SaveReport describing what was written. `saved` is False when the
        user declined to overwrite; the file is then left untouched.

    Raises:
        UnsupportedValueError: A value is neither numeric nor storable in the record.
        NameCollisionError: Two variables map to the same container entry.
        OSError: Any HDF5 create/write/delete failure, propagated unchanged.
    """
    cfg = config or SaveConfig()
    dest = normalize_path(path, cfg.extension)
    report = SaveReport(path=dest)

    # validate everything before the file is touched
    tagged = classify_all(variables, cfg.option_prefix)
    report.options = [v.name for v in tagged if v.kind is Kind.OPTION]
    numeric = [v for v in tagged if v.kind is Kind.NUMERIC]
    others = {v.name: v.value for v in tagged if v.kind is Kind.OTHER}
    if report.options:
        logger.debug("Ignoring option tokens: %s", ", ".join(report.options))

    if not confirm_overwrite(dest, force=force, ask=ask):
        report.saved = False
        return report
    ensure_parent_dir(dest)

    t0 = time.perf_counter()
    mode = "w"
    try:
        if not others and cfg.bootstrap == "placeholder":
            container.bootstrap_placeholder(dest, cfg.placeholder_name)
            mode = "r+"
        with h5py.File(dest, mode) as h5:
            if others:
                report.fields = container.write_record(h5, others)
            for var in numeric:
                _write_numeric(h5, var, cfg, report)
    except Exception:
        logger.exception("Failed to save %s", dest)
        raise
    logger.info(
        "Saved %d datasets and %d fields to %s in %.3fs",
        len(report.datasets),
        len(report.fields),
        dest,
        time.perf_counter() - t0,
    )
    return report


def savefast(
    path: str | Path,
    *args: Any,
    scope: Mapping[str, Any],
    config: Optional[SaveConfig] = None,
    ask: AskFn = input,
) -> SaveReport:
    """
    Save variables by name, resolving them from an explicit scope.

    Usage:
        savefast("/tmp/run1", "A", "B", "-v7.3", True, scope=locals())

    A trailing bool is the force-overwrite flag. Repeated names collapse to one
    and option tokens are passed through without resolution.

    Raises:
        UnresolvedNameError: A name is missing from `scope`.
    """
    cfg = config or SaveConfig()
    names, force = split_force_flag(args)
    variables = {}
    for name in unique_names(names):
        if isinstance(name, str) and name.startswith(cfg.option_prefix):
            variables[name] = None
            continue
        if name not in scope:
            raise UnresolvedNameError(name)
        variables[name] = scope[name]
    return save_variables(path, variables, force=force, config=cfg, ask=ask)
