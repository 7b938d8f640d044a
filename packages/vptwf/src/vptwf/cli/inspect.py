from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, config_from_args
from vptcodec import ProgramTable, TableDefect, read_table
from ..api import atomic_write, table_manifest


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="VPT — Inspect table .vpt (header + entrées)")
    p.add_argument("tables", nargs="+", help="Fichiers .vpt")
    p.add_argument("--json-out", default=None, help="Optionnel: manifeste JSON")
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

    manifests = {}
    ok = 0
    for i, p in enumerate(args.tables, 1):
        p = Path(p)
        try:
            table = ProgramTable.open(read_table(p), cfg)
        except (OSError, TableDefect) as e:
            logging.error("[%d/%d] table invalide %s: %s", i, len(args.tables), p, e)
            continue
        m = table_manifest(table)
        manifests[str(p)] = m
        h = m["header"]
        logging.info("[%d/%d] %s: version=%s vendor_id=%d size=%d programs=%d",
                     i, len(args.tables), p, h["version"], h["vendor_id"], h["size"], h["program_count"])
        for row in m["entries"]:
            logging.info("    %-32s %8d  %s", row["name"], row["payload_len"], row["sha256"][:16])
        if m["truncated"]:
            logging.warning("    table tronquée: %d/%d entrées lisibles", len(m["entries"]), h["program_count"])
        ok += 1

    if args.json_out:
        atomic_write(args.json_out, json.dumps(manifests, indent=2).encode("utf-8"))
        logging.info("→ écrit %s", args.json_out)
    return 0 if ok == len(args.tables) else 1


if __name__ == "__main__":
    sys.exit(main())
