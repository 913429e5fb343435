"""Overwrite confirmation and destination directory creation."""

from __future__ import annotations
from pathlib import Path
from typing import Callable

from ..utils.logger import get_logger

logger = get_logger(__name__)

AskFn = Callable[[str], str]

PROMPT = "Do you want to overwrite (y/N)? "


def confirm_overwrite(path: str | Path, force: bool = False, ask: AskFn = input) -> bool:
    """
    Decide whether a save to `path` may proceed.

    An existing file is only replaced when `force` is true or the user answers
    'y' to the prompt. Anything else, including an empty answer, declines.

    Args:
        path: Normalized destination path.
        force: Skip the prompt and overwrite.
        ask: Prompt function, `input` by default.

    Returns:
        True to proceed, False to abort the save untouched.
    """
    path = Path(path)
    if force or not path.exists():
        logger.info("Saving to %s", path)
        return True
    logger.info("File %s exists", path)
    answer = ask(PROMPT)
    if answer.strip().lower() == "y":
        logger.info("Saving to %s", path)
        return True
    logger.info("Did not save %s", path)
    return False


def ensure_parent_dir(path: str | Path) -> Path:
    """Create the directory holding `path` (recursively) and return it."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent
