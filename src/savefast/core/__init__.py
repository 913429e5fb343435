"""Classification and save routine."""

from .classify import Kind, Variable, classify, classify_all
from .errors import NameCollisionError, SaveFastError, UnresolvedNameError, UnsupportedValueError
from .saver import SaveReport, save_variables, savefast

__all__ = [
    "Kind",
    "Variable",
    "classify",
    "classify_all",
    "SaveReport",
    "save_variables",
    "savefast",
    "SaveFastError",
    "UnsupportedValueError",
    "NameCollisionError",
    "UnresolvedNameError",
]
