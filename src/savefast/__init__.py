"""Fast, uncompressed checkpointing of numpy arrays to HDF5.

`savefast` / `save_variables` write numeric arrays as independent datasets and
everything else into one root record; `load` reads a file back.
"""

from .core.errors import NameCollisionError, SaveFastError, UnresolvedNameError, UnsupportedValueError
from .core.saver import SaveReport, save_variables, savefast
from .io.container import list_entries, load
from .utils.config_loader import SaveConfig, load_save_config

__version__ = "0.1.0"

__all__ = [
    "savefast",
    "save_variables",
    "load",
    "list_entries",
    "SaveReport",
    "SaveConfig",
    "load_save_config",
    "SaveFastError",
    "UnsupportedValueError",
    "NameCollisionError",
    "UnresolvedNameError",
]
