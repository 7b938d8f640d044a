from __future__ import annotations
import argparse, logging, sys
from pathlib import Path
from typing import Optional

from vptcodec.config import ENV_VENDOR_ID, TableConfig, parse_vendor_id


def setup_logging(log_file: Optional[Path], verbose: bool = True) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers)


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--vendor-id", type=parse_vendor_id, default=None,
                   help=f"Vendor ID (décimal ou 0x..). Défaut: ${ENV_VENDOR_ID} ou 0")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")


def config_from_args(args: argparse.Namespace) -> TableConfig:
    return TableConfig.from_env(vendor_id=args.vendor_id, strict=getattr(args, "strict", None) or None)
