from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, config_from_args
from vptcodec import ProgramTable, write_table
from ..api import pack_paths


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="VPT — Pack files/dossiers -> table .vpt")
    p.add_argument("inputs", nargs="+", help="Fichiers ou dossiers à empaqueter")
    p.add_argument("--out", required=True, help="Fichier .vpt de sortie")
    add_common_args(p)
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        cfg = config_from_args(args)
    except ValueError as e:
        logging.error("Configuration invalide: %s", e)
        return 1

    try:
        blob = pack_paths(args.inputs, cfg.vendor_id)
    except (OSError, ValueError) as e:
        logging.error("Échec pack: %s", e)
        return 1

    # relecture de contrôle avant écriture
    table = ProgramTable(blob, cfg.vendor_id)
    try:
        write_table(blob, args.out)
    except OSError as e:
        logging.error("Échec écriture %s: %s", args.out, e)
        return 1
    logging.info("→ écrit %s (%d entrées, %d octets, vendor_id=%d)",
                 args.out, table.header.program_count, table.nbytes, cfg.vendor_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
