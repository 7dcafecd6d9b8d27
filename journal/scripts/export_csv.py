#!/usr/bin/env python3
"""
Export every journal table to CSV (one file per table).

    python -m journal.scripts.export_csv --out exports/
    python -m journal.scripts.export_csv --db ~/journal.db --out /tmp/backup
"""
from __future__ import annotations

import argparse
import logging

from journal.db import Store, get_db_path
from journal.services.export_svc import export_csv


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Export journal data as CSV files")
    ap.add_argument("--db", default=None, help="database file (default: resolved like the API)")
    ap.add_argument("--out", default="exports", help="output directory")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    with Store.open(args.db or get_db_path()) as store:
        files = export_csv(store, args.out)
    for table, path in files.items():
        print(f"{table:<20} -> {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
