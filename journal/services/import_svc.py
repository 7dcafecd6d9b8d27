"""
CSV import, the counterpart of `export_csv`.

Reads the per-table files written by an export back into a store. Rows get
fresh ids; responses and completion logs are re-pointed at the ids their
parent rows received (or at parents already in the store when the file has
no matching row). Every row is validated first and everything is written in
one transaction, so a single bad row rejects the whole import.
"""
from __future__ import annotations

import datetime as dt
import logging
import os
from collections import Counter
from typing import Any, Optional

import pandas as pd

from ..db import LockedConnection, Store
from ..domain.clock import Clock, format_date, parse_date
from ..errors import InvalidInput
from ..repository import (
    affirmation_repo,
    creativity_repo,
    gratitude_repo,
    prompt_repo,
)
from ..repository.schema import table_names
from .gratitude_svc import DAILY_LIMIT

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {
    "prompts": ["text"],
    "responses": ["prompt_id", "text"],
    "affirmations": ["text"],
    "completion_logs": ["affirmation_id"],
    "gratitude_items": ["text", "entry_date"],
    "creativity_entries": ["text", "entry_date"],
}

# Errors listed in the raised message; the rest are only counted.
_MAX_REPORTED = 10


def read_tables(in_dir: str) -> dict[str, pd.DataFrame]:
    """Load every `<table>.csv` present in `in_dir` as string columns."""
    if not os.path.isdir(in_dir):
        raise InvalidInput(f"import directory not found: {in_dir}")
    frames: dict[str, pd.DataFrame] = {}
    for table in table_names():
        path = os.path.join(in_dir, f"{table}.csv")
        if not os.path.exists(path):
            continue
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
        except ValueError as e:
            raise InvalidInput(f"{table}.csv: {e}") from e
        missing = [c for c in REQUIRED_COLUMNS[table] if c not in df.columns]
        if missing:
            raise InvalidInput(f"{table}.csv is missing columns: {', '.join(missing)}")
        frames[table] = df
    if not frames:
        raise InvalidInput(f"no journal CSV files found in {in_dir}")
    return frames


class _Importer:
    def __init__(self, conn: LockedConnection, clock: Clock):
        self.conn = conn
        self.clock = clock
        self.errors: list[str] = []

    def error(self, table: str, i: int, msg: str) -> None:
        self.errors.append(f"{table} row {i + 1}: {msg}")

    def text(self, table, i, row) -> Optional[str]:
        value = row.get("text", "")
        if not value.strip():
            self.error(table, i, "missing or empty 'text'")
            return None
        return value

    def day(self, table, i, row, col, required=False) -> Optional[str]:
        value = row.get(col, "").strip()
        if not value:
            if required:
                self.error(table, i, f"missing '{col}'")
            return None
        try:
            return format_date(parse_date(value))
        except InvalidInput:
            self.error(table, i, f"invalid '{col}': {value!r}")
            return None

    def stamp(self, table, i, row, col, default: Optional[str] = None) -> str:
        value = row.get(col, "").strip()
        if not value:
            return default or self.clock.timestamp()
        try:
            dt.datetime.fromisoformat(value)
        except ValueError:
            self.error(table, i, f"invalid '{col}': {value!r}")
        return value

    def ref(self, table, i, row, col) -> Optional[int]:
        value = row.get(col, "").strip()
        try:
            return int(value)
        except ValueError:
            self.error(table, i, f"missing or invalid '{col}': {value!r}")
            return None

    def old_id(self, row) -> Optional[int]:
        try:
            return int(row.get("id", "").strip())
        except ValueError:
            return None

    def plan(self, frames: dict[str, pd.DataFrame]) -> dict[str, list[dict[str, Any]]]:
        """Validate every row and return the rows to insert, per table."""
        records = {t: df.to_dict("records") for t, df in frames.items()}
        out: dict[str, list[dict[str, Any]]] = {t: [] for t in records}

        taken = set()
        for i, row in enumerate(records.get("prompts", [])):
            text = self.text("prompts", i, row)
            day = self.day("prompts", i, row, "assigned_date")
            if day is not None:
                if day in taken or prompt_repo.get_assigned_on(self.conn, day) is not None:
                    self.error("prompts", i, f"another prompt is already assigned to {day}")
                taken.add(day)
            out["prompts"].append({
                "old_id": self.old_id(row),
                "text": text,
                "assigned_date": day,
                "created_at": self.stamp("prompts", i, row, "created_at"),
            })

        file_prompts = {p["old_id"] for p in out.get("prompts", []) if p["old_id"] is not None}
        for i, row in enumerate(records.get("responses", [])):
            pid = self.ref("responses", i, row, "prompt_id")
            if pid is not None and pid not in file_prompts and not prompt_repo.exists(self.conn, pid):
                self.error("responses", i, f"prompt {pid} does not exist")
            created = self.stamp("responses", i, row, "created_at")
            out["responses"].append({
                "prompt_id": pid,
                "text": self.text("responses", i, row),
                "created_at": created,
                "updated_at": self.stamp("responses", i, row, "updated_at", created),
            })

        for i, row in enumerate(records.get("affirmations", [])):
            created = self.stamp("affirmations", i, row, "created_at")
            out["affirmations"].append({
                "old_id": self.old_id(row),
                "text": self.text("affirmations", i, row),
                "created_at": created,
                "updated_at": self.stamp("affirmations", i, row, "updated_at", created),
            })

        file_affirmations = {a["old_id"] for a in out.get("affirmations", []) if a["old_id"] is not None}
        for i, row in enumerate(records.get("completion_logs", [])):
            aid = self.ref("completion_logs", i, row, "affirmation_id")
            if aid is not None and aid not in file_affirmations and not affirmation_repo.exists(self.conn, aid):
                self.error("completion_logs", i, f"affirmation {aid} does not exist")
            out["completion_logs"].append({
                "affirmation_id": aid,
                "completed_at": self.stamp("completion_logs", i, row, "completed_at"),
            })

        per_day: Counter = Counter()
        for i, row in enumerate(records.get("gratitude_items", [])):
            day = self.day("gratitude_items", i, row, "entry_date", required=True)
            if day is not None:
                per_day[day] += 1
                if gratitude_repo.count_for_date(self.conn, day) + per_day[day] > DAILY_LIMIT:
                    self.error("gratitude_items", i, f"more than {DAILY_LIMIT} items on {day}")
            out["gratitude_items"].append({
                "text": self.text("gratitude_items", i, row),
                "entry_date": day,
                "created_at": self.stamp("gratitude_items", i, row, "created_at"),
            })

        seen = set()
        for i, row in enumerate(records.get("creativity_entries", [])):
            day = self.day("creativity_entries", i, row, "entry_date", required=True)
            if day is not None:
                if day in seen or creativity_repo.get_by_date(self.conn, day) is not None:
                    self.error("creativity_entries", i, f"an entry for {day} already exists")
                seen.add(day)
            created = self.stamp("creativity_entries", i, row, "created_at")
            out["creativity_entries"].append({
                "text": self.text("creativity_entries", i, row),
                "entry_date": day,
                "created_at": created,
                "updated_at": self.stamp("creativity_entries", i, row, "updated_at", created),
            })
        return out

    def write(self, plan: dict[str, list[dict[str, Any]]]) -> dict[str, int]:
        conn = self.conn
        prompt_ids: dict[int, int] = {}
        for p in plan.get("prompts", []):
            new_id = conn.execute(
                "INSERT INTO prompts(text, assigned_date, created_at) VALUES(?,?,?)",
                (p["text"], p["assigned_date"], p["created_at"]),
            ).lastrowid
            if p["old_id"] is not None:
                prompt_ids[p["old_id"]] = int(new_id)

        for r in plan.get("responses", []):
            conn.execute(
                "INSERT INTO responses(prompt_id, text, created_at, updated_at) VALUES(?,?,?,?)",
                (prompt_ids.get(r["prompt_id"], r["prompt_id"]), r["text"], r["created_at"], r["updated_at"]),
            )

        affirmation_ids: dict[int, int] = {}
        for a in plan.get("affirmations", []):
            new_id = conn.execute(
                "INSERT INTO affirmations(text, created_at, updated_at) VALUES(?,?,?)",
                (a["text"], a["created_at"], a["updated_at"]),
            ).lastrowid
            if a["old_id"] is not None:
                affirmation_ids[a["old_id"]] = int(new_id)

        for c in plan.get("completion_logs", []):
            conn.execute(
                "INSERT INTO completion_logs(affirmation_id, completed_at) VALUES(?,?)",
                (affirmation_ids.get(c["affirmation_id"], c["affirmation_id"]), c["completed_at"]),
            )

        for g in plan.get("gratitude_items", []):
            gratitude_repo.insert(conn, g["text"], g["entry_date"], g["created_at"])

        for e in plan.get("creativity_entries", []):
            conn.execute(
                "INSERT INTO creativity_entries(text, entry_date, created_at, updated_at) VALUES(?,?,?,?)",
                (e["text"], e["entry_date"], e["created_at"], e["updated_at"]),
            )
        return {t: len(rows) for t, rows in plan.items()}


def import_csv(store: Store, in_dir: str, clock: Optional[Clock] = None) -> dict[str, int]:
    """Import the CSV files in `in_dir`; returns table -> rows inserted."""
    frames = read_tables(in_dir)
    with store.transaction() as conn:
        importer = _Importer(conn, clock or Clock())
        plan = importer.plan(frames)
        if importer.errors:
            logger.warning("import from %s rejected: %d invalid rows", in_dir, len(importer.errors))
            shown = "; ".join(importer.errors[:_MAX_REPORTED])
            more = len(importer.errors) - _MAX_REPORTED
            if more > 0:
                shown += f"; and {more} more"
            raise InvalidInput(f"import rejected: {shown}")
        counts = importer.write(plan)
    logger.info("imported %s from %s", counts, in_dir)
    return counts
