from __future__ import annotations

from sqlite3 import Connection

# AUTOINCREMENT keeps identities from ever being reused after deletes.
DDL = """
CREATE TABLE IF NOT EXISTS prompts (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  text TEXT NOT NULL,
  assigned_date TEXT,
  created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS responses (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  prompt_id INTEGER NOT NULL REFERENCES prompts(id),
  text TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_responses_prompt ON responses(prompt_id);

CREATE TABLE IF NOT EXISTS affirmations (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  text TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS completion_logs (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  affirmation_id INTEGER NOT NULL REFERENCES affirmations(id),
  completed_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_completion_logs_affirmation ON completion_logs(affirmation_id);

CREATE TABLE IF NOT EXISTS gratitude_items (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  text TEXT NOT NULL,
  entry_date TEXT NOT NULL,
  created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_gratitude_entry_date ON gratitude_items(entry_date);

CREATE TABLE IF NOT EXISTS creativity_entries (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  text TEXT NOT NULL,
  entry_date TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_creativity_entry_date ON creativity_entries(entry_date);

CREATE TABLE IF NOT EXISTS config (
  key TEXT PRIMARY KEY,
  value TEXT
);
"""

# Columns added after the first release; older files get them via ALTER TABLE.
_LATE_COLUMNS = {
    "prompts": {"assigned_date": "TEXT"},
}

# Indexes over late columns run after the ALTERs.
_LATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_prompts_assigned_date ON prompts(assigned_date)",
]


def _ensure_columns(conn: Connection) -> None:
    for table, cols in _LATE_COLUMNS.items():
        names = {c["name"] for c in conn.execute(f"PRAGMA table_info({table})").fetchall()}
        for name, decl in cols.items():
            if name not in names:
                conn.execute(f"ALTER TABLE {table} ADD COLUMN {name} {decl}")


def ensure_schema(conn: Connection) -> None:
    conn.executescript(DDL)
    _ensure_columns(conn)
    for stmt in _LATE_INDEXES:
        conn.execute(stmt)


def table_names() -> list[str]:
    return [
        "prompts",
        "responses",
        "affirmations",
        "completion_logs",
        "gratitude_items",
        "creativity_entries",
    ]
