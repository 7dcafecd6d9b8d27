#!/usr/bin/env python3
"""
Import journal CSV files written by export_csv (one file per table).

    python -m journal.scripts.import_csv --in exports/
    python -m journal.scripts.import_csv --db ~/journal.db --in /tmp/backup

Nothing is written unless every row in every file is valid.
"""
from __future__ import annotations

import argparse
import logging
import sys

from journal.db import Store, get_db_path
from journal.errors import InvalidInput
from journal.services.import_svc import import_csv


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Import journal data from CSV files")
    ap.add_argument("--db", default=None, help="database file (default: resolved like the API)")
    ap.add_argument("--in", dest="in_dir", default="exports", help="directory holding the CSV files")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    with Store.open(args.db or get_db_path()) as store:
        try:
            counts = import_csv(store, args.in_dir)
        except InvalidInput as e:
            print(f"[import] {e}", file=sys.stderr)
            return 1
    for table, n in counts.items():
        print(f"{table:<20} {n} rows")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
