"""Configuration loader utilities.

Settings for a save call live in `SaveConfig` (pydantic). Files are read with
OmegaConf so YAML and JSON both work and `${...}` interpolations are resolved.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Literal, Optional
from omegaconf import OmegaConf
from pydantic import BaseModel, Field, field_validator
from .logger import get_logger
from .paths import DEFAULT_EXTENSION

logger = get_logger(__name__)


class SaveConfig(BaseModel):
    # Container extension appended to suffix-less destinations
    extension: str = Field(DEFAULT_EXTENSION, description="Extension added when the destination has none.")
    # float64 -> float32 and complex128 -> complex64 before writing
    downcast: bool = Field(True, description="Store double precision arrays as single precision.")
    bootstrap: Literal["create", "placeholder"] = Field(
        "create",
        description="How an all-numeric save creates the file: open it empty, or write then delete a placeholder entry.",
    )
    placeholder_name: str = Field("dummy", min_length=1, description="Entry name used by the placeholder bootstrap.")
    option_prefix: str = Field("-", min_length=1, description="Names starting with this marker are option tokens.")

    @field_validator("extension")
    @classmethod
    def _dotted(cls, v: str) -> str:
        if v and not v.startswith("."):
            v = "." + v
        return v


def load_config(path: str | Path) -> Dict[str, Any]:
    """
    Load and resolve a configuration file (YAML/JSON).

    Args:
        path: Path to the config file.

    Returns:
        A plain Python dictionary with resolved config values.

    Raises:
        FileNotFoundError: If the path does not exist.
        Exception: If OmegaConf fails to parse.
    """
    p = Path(path)
    if not p.exists():
        logger.error("Config file not found: %s", p)
        raise FileNotFoundError(f"Config not found: {p}")
    cfg = OmegaConf.load(str(p))
    logger.info("Loaded config: %s", p)
    return OmegaConf.to_container(cfg, resolve=True)


def load_save_config(path: Optional[str | Path] = None) -> SaveConfig:
    """
    Build a `SaveConfig` from a config file, or the defaults when `path` is None.

    The file may hold the settings at top level or under a `save:` key.

    Raises:
        FileNotFoundError: If `path` is given and does not exist.
        pydantic.ValidationError: If a setting has the wrong type or value.
    """
    if path is None:
        return SaveConfig()
    raw = load_config(path) or {}
    section = raw.get("save", raw)
    return SaveConfig(**section)
