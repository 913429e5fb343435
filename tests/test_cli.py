# tests/test_cli.py
"""Smoke tests for the savefast CLI (in-process, no subprocess)."""

from __future__ import annotations
from pathlib import Path

import h5py
import numpy as np
import pytest

from savefast.cli import cli


def _make_npz(p: Path) -> None:
    np.savez(p, A=np.arange(12, dtype=np.int32).reshape(3, 4), B=np.random.randn(5), E=np.zeros(0))


def test_pack_and_ls(tmp_path: Path, capsys) -> None:
    npz = tmp_path / "arrays.npz"
    _make_npz(npz)
    out = tmp_path / "out" / "ckpt"

    assert cli(["pack", str(npz), str(out), "--force"]) == 0
    printed = capsys.readouterr().out
    assert "skipped E (empty)" in printed

    h5 = out.with_suffix(".h5")
    with h5py.File(h5, "r") as f:
        assert sorted(f.keys()) == ["A", "B"]
        assert f["B"].dtype == np.float32

    assert cli(["ls", str(h5)]) == 0
    listing = capsys.readouterr().out
    assert "/A\t(3, 4)\tint32" in listing


def test_pack_no_downcast(tmp_path: Path) -> None:
    npz = tmp_path / "arrays.npz"
    _make_npz(npz)
    out = tmp_path / "full.h5"
    assert cli(["pack", str(npz), str(out), "--no-downcast"]) == 0
    with h5py.File(out, "r") as f:
        assert f["B"].dtype == np.float64


def test_pack_with_config(tmp_path: Path) -> None:
    npz = tmp_path / "arrays.npz"
    _make_npz(npz)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("save:\n  extension: .mat\n  bootstrap: placeholder\n")
    out = tmp_path / "ckpt"
    assert cli(["pack", str(npz), str(out), "--config", str(cfg)]) == 0
    assert (tmp_path / "ckpt.mat").exists()


def test_pack_missing_input(tmp_path: Path) -> None:
    assert cli(["pack", str(tmp_path / "nope.npz"), str(tmp_path / "o")]) == 1


def test_log_level_is_validated(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        cli(["--log-level", "verbose", "ls", str(tmp_path / "x.h5")])
    assert exc.value.code == 2


def test_log_level_case_insensitive(tmp_path: Path) -> None:
    h5 = tmp_path / "one.h5"
    with h5py.File(h5, "w") as f:
        f.create_dataset("a", data=np.ones(2))
    assert cli(["--log-level", "debug", "ls", str(h5)]) == 0
    assert cli(["--log-level", "INFO", "ls", str(h5)]) == 0
