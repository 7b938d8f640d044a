from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, ensure_dir, add_common_args, config_from_args
from vptcodec import ProgramTable, read_table
from ..api import unpack_to_directory


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="VPT — Extract table .vpt -> fichiers")
    p.add_argument("table", help="Fichier .vpt")
    p.add_argument("--out", required=True, help="Dossier de sortie")
    p.add_argument("--strict", action="store_true", help="Refuser les tables tronquées")
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

    out_dir = Path(args.out); ensure_dir(out_dir)
    try:
        table = ProgramTable.open(read_table(args.table), cfg)
        written = unpack_to_directory(table, out_dir)
    except (OSError, ValueError) as e:
        # TableDefect est une ValueError, tout comme un nom d'entrée dangereux
        logging.error("Échec extract %s: %s", args.table, e)
        return 1
    for p in written:
        logging.debug("→ %s", p)
    logging.info("Terminé: %d entrées extraites dans %s", len(written), out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
