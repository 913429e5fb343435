"""Exception types raised by the save path.

A declined overwrite is not an error and has no exception here; the saver
returns a report with ``saved=False`` instead. HDF5 and OS failures are not
wrapped either: h5py's own exceptions reach the caller unchanged.
"""

from __future__ import annotations

__all__ = [
    "SaveFastError",
    "UnsupportedValueError",
    "NameCollisionError",
    "UnresolvedNameError",
]


class SaveFastError(ValueError):
    """Base class for validation failures detected before the file is touched."""


class UnsupportedValueError(SaveFastError):
    """A variable is neither a numeric array nor representable in the root record."""

    def __init__(self, name: str, value: object, reason: str | None = None) -> None:
        self.name = name
        self.type_name = type(value).__name__
        msg = f"Variable '{name}' has unsupported type {self.type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class NameCollisionError(SaveFastError):
    """Two variables would be written to the same container entry."""

    def __init__(self, entry: str, first: str, second: str) -> None:
        self.entry = entry
        self.variables = (first, second)
        super().__init__(
            f"Entry '/{entry}' would be written by both '{first}' and '{second}'"
        )


class UnresolvedNameError(SaveFastError):
    """A requested variable name is missing from the supplied scope."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Variable '{name}' not found in scope")
