"""Up-front classification of the variables handed to a save call.

Every (name, value) pair is tagged exactly once:
  - NUMERIC: numpy array or scalar of integer, float or complex dtype, or a
    Python number / list of numbers (converted with np.asarray)
  - OPTION: a name starting with the option marker (e.g. '-v7.3'); never persisted
  - OTHER: a value the root record writer can store (dicts, strings, bytes,
    bools, bool/string arrays and lists convertible to them)

Values outside these kinds are rejected with `UnsupportedValueError` before
the destination file is opened.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from .errors import NameCollisionError, SaveFastError, UnsupportedValueError

__all__ = [
    "Kind",
    "Variable",
    "NUMERIC_KINDS",
    "RECORD_KINDS",
    "split_force_flag",
    "unique_names",
    "is_numeric_array",
    "classify",
    "classify_all",
    "check_collisions",
]

# numpy dtype.kind codes
NUMERIC_KINDS = "iufc"
RECORD_KINDS = "biufcSU"

REAL_SUFFIX = "_r"
IMAG_SUFFIX = "_i"


class Kind(str, Enum):
    NUMERIC = "numeric"
    OPTION = "option"
    OTHER = "other"


@dataclass(frozen=True)
class Variable:
    name: str
    value: Any
    kind: Kind
    is_complex: bool = False

    @property
    def entries(self) -> Tuple[str, ...]:
        """Top-level container entries this variable will occupy."""
        if self.kind is Kind.OPTION:
            return ()
        if self.kind is Kind.NUMERIC and self.is_complex:
            return (self.name + REAL_SUFFIX, self.name + IMAG_SUFFIX)
        return (self.name,)


def split_force_flag(args: Sequence[Any]) -> Tuple[List[Any], bool]:
    """
    Strip a trailing boolean force flag from positional arguments.

    Returns:
        (remaining arguments, force flag). `force` is False when no flag was given.
    """
    items = list(args)
    if items and isinstance(items[-1], (bool, np.bool_)):
        return items[:-1], bool(items[-1])
    return items, False


def unique_names(names: Iterable[str]) -> List[str]:
    """De-duplicate names, keeping the first occurrence order."""
    return list(dict.fromkeys(names))


def is_numeric_array(value: Any) -> bool:
    return isinstance(value, (np.ndarray, np.generic)) and value.dtype.kind in NUMERIC_KINDS


def _as_numeric(value: Any) -> np.ndarray | None:
    """Top-level Python numbers and numeric sequences, as an array; None otherwise."""
    if isinstance(value, bool) or not isinstance(value, (int, float, complex, list, tuple)):
        return None
    try:
        arr = np.asarray(value)
    except ValueError:
        return None
    return arr if arr.dtype.kind in NUMERIC_KINDS else None


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise SaveFastError(f"Variable names must be non-empty strings, got {name!r}")
    if "/" in name or name in (".", ".."):
        raise SaveFastError(f"Invalid variable name {name!r}")


def _check_record_value(name: str, value: Any, where: str) -> None:
    """Raise if `value` cannot be written into the root record."""
    if isinstance(value, Mapping):
        for key, sub in value.items():
            if not isinstance(key, str) or not key or "/" in key:
                raise UnsupportedValueError(name, value, f"invalid field name {key!r} at {where}")
            _check_record_value(name, sub, f"{where}/{key}")
        return
    if isinstance(value, (str, bytes, bool, int, float, complex)):
        return
    if isinstance(value, (list, tuple)):
        try:
            arr = np.asarray(value)
        except ValueError as exc:
            raise UnsupportedValueError(name, value, f"ragged sequence at {where}") from exc
        if arr.dtype.kind not in RECORD_KINDS:
            raise UnsupportedValueError(name, value, f"mixed or non-numeric sequence at {where}")
        return
    if isinstance(value, (np.ndarray, np.generic)):
        if value.dtype.kind not in RECORD_KINDS:
            raise UnsupportedValueError(name, value, f"dtype {value.dtype} at {where}")
        return
    raise UnsupportedValueError(name, value)


def classify(name: str, value: Any, option_prefix: str = "-") -> Variable:
    """
    Tag a single variable.

    Args:
        name: Variable name.
        value: Resolved value (ignored for option tokens).
        option_prefix: Marker that identifies option tokens.

    Returns:
        Variable carrying its kind.

    Raises:
        SaveFastError: If the name is not a usable entry name.
        UnsupportedValueError: If the value is neither numeric nor storable in the record.
    """
    if isinstance(name, str) and name.startswith(option_prefix):
        return Variable(name, value, Kind.OPTION)
    _check_name(name)
    if is_numeric_array(value):
        return Variable(name, value, Kind.NUMERIC, is_complex=value.dtype.kind == "c")
    arr = _as_numeric(value)
    if arr is not None:
        return Variable(name, arr, Kind.NUMERIC, is_complex=arr.dtype.kind == "c")
    _check_record_value(name, value, name)
    return Variable(name, value, Kind.OTHER)


def check_collisions(variables: Iterable[Variable]) -> None:
    """Raise `NameCollisionError` if two variables map to the same entry."""
    owners: Dict[str, str] = {}
    for var in variables:
        for entry in var.entries:
            if entry in owners:
                raise NameCollisionError(entry, owners[entry], var.name)
            owners[entry] = var.name


def classify_all(variables: Mapping[str, Any], option_prefix: str = "-") -> List[Variable]:
    """Classify a name->value mapping in order and validate entry names."""
    tagged = [classify(name, value, option_prefix) for name, value in variables.items()]
    check_collisions(tagged)
    return tagged
