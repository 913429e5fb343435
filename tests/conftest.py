# tests/conftest.py
"""Shared fixtures: a fixed random seed and stand-ins for the overwrite prompt."""

from __future__ import annotations

import os
import random
from typing import Callable, List

import numpy as np
import pytest


@pytest.fixture(autouse=True, scope="session")
def deterministic_test_env():
    """Seed python and numpy once per session (PYTEST_SEED, default 42) so random arrays repeat."""
    seed = int(os.environ.get("PYTEST_SEED", "42"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    yield


@pytest.fixture
def answer() -> Callable[[str], Callable[[str], str]]:
    """
    Build a prompt stub returning a fixed answer.

    The stub records each prompt it was shown in its `prompts` attribute.
    """

    def _make(reply: str) -> Callable[[str], str]:
        prompts: List[str] = []

        def ask(prompt: str) -> str:
            prompts.append(prompt)
            return reply

        ask.prompts = prompts  # type: ignore[attr-defined]
        return ask

    return _make


@pytest.fixture
def no_prompt() -> Callable[[str], str]:
    """Prompt stub that fails the test if the user would have been asked."""

    def ask(prompt: str) -> str:
        raise AssertionError(f"unexpected prompt: {prompt}")

    return ask
