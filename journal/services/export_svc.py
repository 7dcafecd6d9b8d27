from __future__ import annotations

import logging
import os

import pandas as pd

from ..db import Store
from ..repository.schema import table_names

logger = logging.getLogger(__name__)


def export_csv(store: Store, out_dir: str) -> dict[str, str]:
    """Write one CSV per journal table into `out_dir`; returns table -> path."""
    os.makedirs(out_dir, exist_ok=True)
    written: dict[str, str] = {}
    for table in table_names():
        cur = store.conn.execute(f"SELECT * FROM {table} ORDER BY id")
        columns = [d[0] for d in cur.description]
        df = pd.DataFrame([tuple(r) for r in cur.fetchall()], columns=columns)
        path = os.path.join(out_dir, f"{table}.csv")
        df.to_csv(path, index=False, encoding="utf-8")
        written[table] = path
        logger.info("exported %d rows from %s to %s", len(df), table, path)
    return written
