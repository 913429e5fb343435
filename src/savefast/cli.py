"""
CLI entrypoint for savefast.

Provides two thin commands:
  - pack: save every array of a .npz archive into an HDF5 container
  - ls: list the datasets of a container with their shape and dtype

Usage:
  python -m savefast.cli pack arrays.npz out/checkpoint --force
  python -m savefast.cli ls out/checkpoint.h5
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np

from .core.saver import save_variables
from .io.container import list_entries
from .utils.config_loader import load_save_config
from .utils.logger import get_logger, set_verbosity

logger = get_logger(__name__)


def _pack(args: argparse.Namespace) -> int:
    src = Path(args.input)
    if not src.exists():
        logger.error("Input archive not found: %s", src)
        return 1
    cfg = load_save_config(args.config)
    if args.no_downcast:
        cfg = cfg.model_copy(update={"downcast": False})
    with np.load(src, allow_pickle=False) as npz:
        variables = {name: npz[name] for name in npz.files}
    report = save_variables(args.out, variables, force=args.force, config=cfg)
    if not report.saved:
        return 2
    for name in report.skipped:
        print(f"skipped {name} (empty)")
    print(f"{report.path}: {len(report.datasets)} datasets")
    return 0


def _ls(args: argparse.Namespace) -> int:
    for name, shape, dtype in list_entries(args.file):
        print(f"/{name}\t{shape}\t{dtype}")
    return 0


def cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="savefast")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_pack = sub.add_parser("pack", help="Save the arrays of a .npz archive to an HDF5 container")
    p_pack.add_argument("input", help="Input .npz archive")
    p_pack.add_argument("out", help="Destination path (extension added if missing)")
    p_pack.add_argument("--force", action="store_true", help="Overwrite without asking")
    p_pack.add_argument("--config", type=str, default=None, help="Path to a savefast YAML config")
    p_pack.add_argument("--no-downcast", action="store_true", help="Keep double precision arrays as-is")

    p_ls = sub.add_parser("ls", help="List datasets in a container")
    p_ls.add_argument("file", help="HDF5 container to inspect")

    args = parser.parse_args(argv)
    set_verbosity(args.log_level)
    if args.cmd == "pack":
        return _pack(args)
    if args.cmd == "ls":
        return _ls(args)
    parser.print_help()
    return 1


def main() -> None:
    raise SystemExit(cli())


if __name__ == "__main__":
    main()
