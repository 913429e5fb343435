"""HDF5 container primitives (h5py).

Layout of a savefast file:
  - root record: one entry per non-numeric variable. Dicts become groups,
    strings become UTF-8 string datasets, bytes become opaque datasets,
    scalars and small arrays become plain datasets.
  - numeric variables: one uncompressed, unchunked dataset each at '/<name>'.
    Complex arrays are split into '/<name>_r' and '/<name>_i', tagged with a
    `complex_part` attribute so `load` can recombine them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import h5py
import numpy as np

from ..utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "COMPLEX_ATTR",
    "write_record",
    "write_dataset",
    "write_complex",
    "bootstrap_placeholder",
    "load",
    "list_entries",
]

COMPLEX_ATTR = "complex_part"
STRING_DTYPE = h5py.string_dtype(encoding="utf-8")


def _write_field(group: h5py.Group, key: str, value: Any) -> None:
    if isinstance(value, Mapping):
        sub = group.create_group(key)
        for k, v in value.items():
            _write_field(sub, k, v)
        return
    if isinstance(value, str):
        group.create_dataset(key, data=value, dtype=STRING_DTYPE)
        return
    if isinstance(value, bytes):
        # opaque byte string
        group.create_dataset(key, data=np.void(value))
        return
    arr = np.asarray(value)
    if arr.dtype.kind == "U":
        group.create_dataset(key, data=arr.astype(object), dtype=STRING_DTYPE)
    else:
        group.create_dataset(key, data=arr)


def write_record(h5: h5py.Group, fields: Mapping[str, Any]) -> List[str]:
    """
    Write all non-numeric variables as the container's root record.

    Args:
        h5: Open file (or group) to write into.
        fields: name -> value mapping, already validated by classification.

    Returns:
        The field names written, in order.
    """
    for key, value in fields.items():
        _write_field(h5, key, value)
        logger.debug("Wrote record field /%s", key)
    return list(fields)


def write_dataset(h5: h5py.Group, name: str, arr: np.ndarray) -> h5py.Dataset:
    """Create a dataset sized and typed like `arr`, then write `arr` into it."""
    ds = h5.create_dataset(name, shape=arr.shape, dtype=arr.dtype)
    ds[()] = arr
    logger.debug("Wrote /%s %s %s", name, arr.shape, arr.dtype)
    return ds


def write_complex(h5: h5py.Group, name: str, arr: np.ndarray) -> Tuple[str, str]:
    """Write a complex array as two real datasets '<name>_r' and '<name>_i'."""
    real_name, imag_name = f"{name}_r", f"{name}_i"
    ds_r = h5.create_dataset(real_name, shape=arr.shape, dtype=arr.real.dtype)
    ds_i = h5.create_dataset(imag_name, shape=arr.shape, dtype=arr.real.dtype)
    ds_r[()] = arr.real
    ds_i[()] = arr.imag
    ds_r.attrs[COMPLEX_ATTR] = "real"
    ds_i.attrs[COMPLEX_ATTR] = "imag"
    logger.debug("Wrote /%s and /%s %s %s", real_name, imag_name, arr.shape, arr.real.dtype)
    return real_name, imag_name


def bootstrap_placeholder(path: str | Path, name: str = "dummy") -> None:
    """
    Force creation of `path` by writing a scalar entry, then delete that entry.

    Both handles are closed on every exit path. The file is left empty and
    must be reopened in 'r+' mode by the caller.
    """
    with h5py.File(path, "w") as h5:
        h5.create_dataset(name, data=0.0)
        h5.flush()
    with h5py.File(path, "r+") as h5:
        del h5[name]
    logger.debug("Created %s through placeholder '%s'", path, name)


def _read(node: h5py.Group | h5py.Dataset) -> Any:
    if isinstance(node, h5py.Group):
        return {key: _read(node[key]) for key in node}
    if h5py.check_string_dtype(node.dtype) is not None:
        value = node.asstr()[()]
        return value.tolist() if isinstance(value, np.ndarray) else value
    if node.dtype.kind == "V":
        return node[()].tobytes()
    data = node[()]
    if isinstance(data, np.ndarray):
        return data
    return data.item() if hasattr(data, "item") else data


def load(path: str | Path) -> Dict[str, Any]:
    """
    Read a savefast container back into a name -> value dict.

    Complex parts tagged with `complex_part` are recombined under their base
    name; everything else keeps the name it was stored under.
    """
    out: Dict[str, Any] = {}
    parts: Dict[str, Dict[str, np.ndarray]] = {}
    with h5py.File(path, "r") as h5:
        for key in h5:
            node = h5[key]
            part = node.attrs.get(COMPLEX_ATTR) if isinstance(node, h5py.Dataset) else None
            if isinstance(part, bytes):
                part = part.decode("utf-8")
            if part in ("real", "imag"):
                parts.setdefault(key[:-2], {})[part] = node[()]
                continue
            out[key] = _read(node)
    for base, pair in parts.items():
        if "real" in pair and "imag" in pair:
            real, imag = np.asarray(pair["real"]), np.asarray(pair["imag"])
            combined = np.empty(real.shape, dtype=np.result_type(real.dtype, np.complex64))
            combined.real = real
            combined.imag = imag
            out[base] = combined
        else:
            logger.warning("Incomplete complex pair for %s in %s", base, path)
            suffix = "_r" if "real" in pair else "_i"
            out[base + suffix] = next(iter(pair.values()))
    return out


def list_entries(path: str | Path) -> List[Tuple[str, Tuple[int, ...], str]]:
    """Return (name, shape, dtype) for every dataset in the file, depth first."""
    entries: List[Tuple[str, Tuple[int, ...], str]] = []

    def _visit(name: str, obj: Any) -> None:
        if isinstance(obj, h5py.Dataset):
            entries.append((name, tuple(obj.shape), str(obj.dtype)))

    with h5py.File(path, "r") as h5:
        h5.visititems(_visit)
    return entries
