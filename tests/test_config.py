"""Tests for configuration loading and validation."""

from __future__ import annotations
from pathlib import Path

import pytest
from pydantic import ValidationError

from savefast.utils.config_loader import SaveConfig, load_config, load_save_config


def test_defaults() -> None:
    cfg = load_save_config(None)
    assert cfg == SaveConfig()
    assert cfg.extension == ".h5"
    assert cfg.downcast is True
    assert cfg.bootstrap == "create"
    assert cfg.placeholder_name == "dummy"


def test_yaml_with_save_section(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text("save:\n  extension: mat\n  downcast: false\n  bootstrap: placeholder\n")
    cfg = load_save_config(p)
    assert cfg.extension == ".mat"
    assert cfg.downcast is False
    assert cfg.bootstrap == "placeholder"


def test_flat_json_config(tmp_path: Path) -> None:
    p = tmp_path / "cfg.json"
    p.write_text('{"placeholder_name": "__init__", "option_prefix": "+"}')
    cfg = load_save_config(p)
    assert cfg.placeholder_name == "__init__"
    assert cfg.option_prefix == "+"


def test_interpolation_is_resolved(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text("ext: .mat\nsave:\n  extension: ${ext}\n")
    assert load_config(p)["save"]["extension"] == ".mat"


def test_bad_bootstrap_rejected(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text("save:\n  bootstrap: sometimes\n")
    with pytest.raises(ValidationError):
        load_save_config(p)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_shipped_config_matches_defaults() -> None:
    shipped = Path(__file__).resolve().parents[1] / "configs" / "savefast.yaml"
    assert load_save_config(shipped) == SaveConfig()
